"""Typed resource quantities and their aggregation.

A Quantity is an exact integer magnitude (millicores for CPU, bytes for
memory and storage) tagged with its unit class. Sums never leave integer
space; conversion to display units happens only in scale_to().
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from kubereport.constants.enums import DisplayUnit, UnitClass
from kubereport.exceptions import UnitClassMismatch
from kubereport.utils.resource_parser import memory_str_to_bytes, parse_cpu_millicores

_BYTE_UNITS: dict[DisplayUnit, int] = {
    DisplayUnit.BYTES: 1,
    DisplayUnit.KIB: 1024,
    DisplayUnit.MIB: 1024**2,
    DisplayUnit.GIB: 1024**3,
}
_CPU_UNITS: dict[DisplayUnit, int] = {
    DisplayUnit.MILLICORES: 1,
    DisplayUnit.CORES: 1000,
}


@dataclass(frozen=True)
class Quantity:
    """Signed integer resource amount with a unit class."""

    value: int
    unit_class: UnitClass

    @classmethod
    def zero(cls, unit_class: UnitClass) -> Quantity:
        """Return the additive identity for a unit class."""
        return cls(0, unit_class)

    def __add__(self, other: object) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: object) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        _check_same_class(self, other)
        return Quantity(self.value - other.value, self.unit_class)


def _check_same_class(a: Quantity, b: Quantity) -> None:
    if a.unit_class is not b.unit_class:
        raise UnitClassMismatch(a.unit_class, b.unit_class)


def zero(unit_class: UnitClass) -> Quantity:
    """Return the zero quantity of a unit class."""
    return Quantity.zero(unit_class)


def add(a: Quantity, b: Quantity) -> Quantity:
    """Add two quantities of the same class.

    Raises:
        UnitClassMismatch: If the unit classes differ.
    """
    _check_same_class(a, b)
    return Quantity(a.value + b.value, a.unit_class)


def aggregate(quantities: Iterable[Quantity], unit_class: UnitClass) -> Quantity:
    """Sum quantities; an empty iterable yields the class's zero value."""
    total = zero(unit_class)
    for quantity in quantities:
        total = add(total, quantity)
    return total


def parse_quantity(raw: Any, unit_class: UnitClass) -> Quantity:
    """Parse a Kubernetes quantity string into a Quantity of the given class.

    Absent or malformed values parse to zero.
    """
    if unit_class is UnitClass.CPU:
        return Quantity(parse_cpu_millicores(raw), unit_class)
    return Quantity(memory_str_to_bytes(raw), unit_class)


def scale_to(quantity: Quantity, unit: DisplayUnit) -> float:
    """Convert a quantity to a display unit.

    Pure conversion of an already-summed value; binary (1024-based) scaling is
    used for byte classes.

    Raises:
        UnitClassMismatch: If the unit does not apply to the quantity's class.
    """
    if quantity.unit_class is UnitClass.CPU:
        divisor = _CPU_UNITS.get(unit)
    else:
        divisor = _BYTE_UNITS.get(unit)
    if divisor is None:
        raise UnitClassMismatch(quantity.unit_class, unit)
    if divisor == 1:
        return float(quantity.value)
    return quantity.value / divisor


def percentage(part: Quantity, whole: Quantity) -> float:
    """Return part/whole * 100, or 0.0 when whole is zero."""
    _check_same_class(part, whole)
    if whole.value == 0:
        return 0.0
    return part.value / whole.value * 100


def format_percentage(value: float) -> str:
    """Format a percentage rounded to two decimals (e.g. "91.67%")."""
    return f"{value:.2f}%"
