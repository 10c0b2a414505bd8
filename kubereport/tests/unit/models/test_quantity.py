"""Tests for the quantity model."""

from __future__ import annotations

import pytest

from kubereport.constants.enums import DisplayUnit, UnitClass
from kubereport.exceptions import UnitClassMismatch
from kubereport.models.quantity import (
    Quantity,
    add,
    aggregate,
    format_percentage,
    parse_quantity,
    percentage,
    scale_to,
)


def cpu(value: int) -> Quantity:
    return Quantity(value, UnitClass.CPU)


def mem(value: int) -> Quantity:
    return Quantity(value, UnitClass.MEMORY)


class TestAggregate:
    """Tests for aggregate and add."""

    def test_empty_is_zero(self) -> None:
        """Test aggregating nothing yields the class zero value."""
        assert aggregate([], UnitClass.CPU) == Quantity.zero(UnitClass.CPU)
        assert aggregate([], UnitClass.MEMORY).value == 0

    def test_single_item_is_identity(self) -> None:
        """Test aggregate([q]) == q."""
        assert aggregate([cpu(250)], UnitClass.CPU) == cpu(250)

    def test_order_independent(self) -> None:
        """Test the sum does not depend on order."""
        items = [cpu(100), cpu(250), cpu(3), cpu(1000)]
        assert aggregate(items, UnitClass.CPU) == aggregate(reversed(items), UnitClass.CPU)

    def test_split_associativity(self) -> None:
        """Test aggregate(A + B) == aggregate(A) + aggregate(B)."""
        first = [mem(1024), mem(1)]
        second = [mem(512 * 1024**2)]
        combined = aggregate(first + second, UnitClass.MEMORY)
        split = aggregate(first, UnitClass.MEMORY) + aggregate(second, UnitClass.MEMORY)
        assert combined == split

    def test_mixed_classes_rejected(self) -> None:
        """Test adding CPU to memory raises UnitClassMismatch."""
        with pytest.raises(UnitClassMismatch):
            add(cpu(1), mem(1))
        with pytest.raises(UnitClassMismatch):
            aggregate([cpu(1), mem(1)], UnitClass.CPU)

    def test_subtraction(self) -> None:
        """Test subtraction keeps the unit class."""
        assert cpu(6000) - cpu(500) == cpu(5500)


class TestParseQuantity:
    """Tests for parse_quantity."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("100m", 100), ("2", 2000), ("1.5", 1500), ("250000000n", 250), (None, 0)],
    )
    def test_cpu(self, raw: object, expected: int) -> None:
        """Test CPU strings parse to millicores."""
        assert parse_quantity(raw, UnitClass.CPU) == cpu(expected)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("8Gi", 8 * 1024**3), ("512Mi", 512 * 1024**2), ("129M", 129_000_000), ("", 0)],
    )
    def test_memory(self, raw: object, expected: int) -> None:
        """Test memory strings parse to bytes."""
        assert parse_quantity(raw, UnitClass.MEMORY) == mem(expected)


class TestScaleTo:
    """Tests for scale_to and percentages."""

    def test_scale_is_pure(self) -> None:
        """Test scaling the sum equals the sum of scaled parts within float precision."""
        parts = [mem(3 * 1024**2), mem(5 * 1024**2 + 7)]
        total = aggregate(parts, UnitClass.MEMORY)
        scaled_parts = sum(scale_to(part, DisplayUnit.MIB) for part in parts)
        assert scale_to(total, DisplayUnit.MIB) == pytest.approx(scaled_parts)

    def test_scale_does_not_mutate(self) -> None:
        """Test scale_to leaves its input unchanged."""
        quantity = mem(2 * 1024**3)
        assert scale_to(quantity, DisplayUnit.GIB) == 2.0
        assert quantity.value == 2 * 1024**3

    def test_cpu_units(self) -> None:
        """Test millicores and cores."""
        assert scale_to(cpu(1500), DisplayUnit.MILLICORES) == 1500.0
        assert scale_to(cpu(1500), DisplayUnit.CORES) == 1.5

    def test_wrong_unit_rejected(self) -> None:
        """Test a byte unit cannot scale a CPU quantity."""
        with pytest.raises(UnitClassMismatch):
            scale_to(cpu(1), DisplayUnit.MIB)

    def test_percentage(self) -> None:
        """Test percentage rounding and the zero-denominator rule."""
        assert format_percentage(percentage(cpu(5500), cpu(6000))) == "91.67%"
        assert percentage(cpu(10), cpu(0)) == 0.0
