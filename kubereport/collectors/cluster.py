"""Cluster-wide capacity summary shared by both report types."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from kubereport.collectors.base import AggregateCollector, CollectContext, Listings
from kubereport.collectors.resources import format_mib, format_millicores, status_quantity
from kubereport.constants.enums import ResourceKind, UnitClass
from kubereport.models.quantity import (
    Quantity,
    aggregate,
    format_percentage,
    parse_quantity,
    percentage,
)
from kubereport.utils.formatting import get_mapping, name_of

logger = logging.getLogger(__name__)

CLUSTER_SUMMARY_COLUMNS = ("RESOURCE TYPE", "CPU (mC)", "Memory (MiB)")


@dataclass(frozen=True)
class ClusterCapacity:
    """Summed allocatable and available capacity across all nodes."""

    node_count: int
    pod_count: int
    allocatable_cpu: Quantity
    allocatable_memory: Quantity
    available_cpu: Quantity
    available_memory: Quantity

    @property
    def available_cpu_pct(self) -> float:
        return percentage(self.available_cpu, self.allocatable_cpu)

    @property
    def available_memory_pct(self) -> float:
        return percentage(self.available_memory, self.allocatable_memory)


def compute_capacity(listings: Listings) -> ClusterCapacity:
    """Sum node allocatable, then subtract usage reported by node metrics.

    Usage entries for nodes that are not in the node listing are ignored.
    """
    nodes = listings[ResourceKind.NODES]
    node_names = {name_of(node) for node in nodes}
    usage = [
        get_mapping(metric, "usage")
        for metric in listings[ResourceKind.NODE_METRICS]
        if name_of(metric) in node_names
    ]

    allocatable_cpu = aggregate(
        (status_quantity(n, "allocatable", "cpu", UnitClass.CPU) for n in nodes),
        UnitClass.CPU,
    )
    allocatable_memory = aggregate(
        (status_quantity(n, "allocatable", "memory", UnitClass.MEMORY) for n in nodes),
        UnitClass.MEMORY,
    )
    used_cpu = aggregate(
        (parse_quantity(u.get("cpu"), UnitClass.CPU) for u in usage), UnitClass.CPU
    )
    used_memory = aggregate(
        (parse_quantity(u.get("memory"), UnitClass.MEMORY) for u in usage),
        UnitClass.MEMORY,
    )
    if len(usage) < len(nodes):
        logger.warning(
            "Node metrics missing for %d of %d nodes", len(nodes) - len(usage), len(nodes)
        )

    return ClusterCapacity(
        node_count=len(nodes),
        pod_count=len(listings[ResourceKind.PODS]),
        allocatable_cpu=allocatable_cpu,
        allocatable_memory=allocatable_memory,
        available_cpu=allocatable_cpu - used_cpu,
        available_memory=allocatable_memory - used_memory,
    )


def build_cluster_summary(
    listings: Listings, context: CollectContext
) -> list[Sequence[str]]:
    capacity = compute_capacity(listings)
    return [
        ("Total Nodes", str(capacity.node_count), ""),
        ("Total Pods", str(capacity.pod_count), ""),
        (
            "Cluster Allocatable",
            format_millicores(capacity.allocatable_cpu),
            format_mib(capacity.allocatable_memory),
        ),
        (
            "Cluster Available",
            format_millicores(capacity.available_cpu),
            format_mib(capacity.available_memory),
        ),
        (
            "Cluster Available (%)",
            format_percentage(capacity.available_cpu_pct),
            format_percentage(capacity.available_memory_pct),
        ),
    ]


def cluster_summary_collector(
    columns: Sequence[str] = CLUSTER_SUMMARY_COLUMNS,
) -> AggregateCollector:
    return AggregateCollector(
        kinds=(ResourceKind.NODES, ResourceKind.NODE_METRICS, ResourceKind.PODS),
        columns=tuple(columns),
        build=build_cluster_summary,
    )
