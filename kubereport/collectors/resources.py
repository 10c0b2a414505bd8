"""Pod and node resource roll-ups built on the quantity model."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from kubereport.constants.enums import DisplayUnit, UnitClass
from kubereport.models.quantity import Quantity, aggregate, parse_quantity, scale_to
from kubereport.utils.formatting import get_list, get_mapping


@dataclass(frozen=True)
class ResourceTotals:
    """Summed container requests and limits."""

    cpu_requests: Quantity
    cpu_limits: Quantity
    memory_requests: Quantity
    memory_limits: Quantity

    @classmethod
    def zero(cls) -> ResourceTotals:
        return cls(
            Quantity.zero(UnitClass.CPU),
            Quantity.zero(UnitClass.CPU),
            Quantity.zero(UnitClass.MEMORY),
            Quantity.zero(UnitClass.MEMORY),
        )

    def __add__(self, other: ResourceTotals) -> ResourceTotals:
        return ResourceTotals(
            self.cpu_requests + other.cpu_requests,
            self.cpu_limits + other.cpu_limits,
            self.memory_requests + other.memory_requests,
            self.memory_limits + other.memory_limits,
        )


def _container_quantity(
    container: dict[str, Any], container_type: str, resource: str, unit_class: UnitClass
) -> Quantity:
    values = get_mapping(container, f"resources.{container_type}")
    return parse_quantity(values.get(resource), unit_class)


def pod_totals(pod: dict[str, Any]) -> ResourceTotals:
    """Sum requests and limits over the pod's regular containers.

    Containers without a declared value contribute zero.
    """
    containers = [c for c in get_list(pod, "spec.containers") if isinstance(c, dict)]
    return ResourceTotals(
        aggregate(
            (_container_quantity(c, "requests", "cpu", UnitClass.CPU) for c in containers),
            UnitClass.CPU,
        ),
        aggregate(
            (_container_quantity(c, "limits", "cpu", UnitClass.CPU) for c in containers),
            UnitClass.CPU,
        ),
        aggregate(
            (
                _container_quantity(c, "requests", "memory", UnitClass.MEMORY)
                for c in containers
            ),
            UnitClass.MEMORY,
        ),
        aggregate(
            (_container_quantity(c, "limits", "memory", UnitClass.MEMORY) for c in containers),
            UnitClass.MEMORY,
        ),
    )


def sum_totals(pods: Iterable[dict[str, Any]]) -> ResourceTotals:
    total = ResourceTotals.zero()
    for pod in pods:
        total = total + pod_totals(pod)
    return total


def status_quantity(
    obj: dict[str, Any], section: str, resource: str, unit_class: UnitClass
) -> Quantity:
    """Read a quantity from status.<section>.<resource> (e.g. allocatable.cpu)."""
    return parse_quantity(get_mapping(obj, f"status.{section}").get(resource), unit_class)


def format_millicores(quantity: Quantity) -> str:
    return str(int(scale_to(quantity, DisplayUnit.MILLICORES)))


def format_mib(quantity: Quantity) -> str:
    """Whole MiB, truncated."""
    return str(int(scale_to(quantity, DisplayUnit.MIB)))


def format_mib_decimal(quantity: Quantity) -> str:
    return f"{scale_to(quantity, DisplayUnit.MIB):.2f}"


def format_gib(quantity: Quantity) -> str:
    return f"{scale_to(quantity, DisplayUnit.GIB):.2f}Gi"
