"""Collectors for the general (PDF) report."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Sequence
from typing import Any

from kubereport.collectors.base import (
    AggregateCollector,
    CollectContext,
    ListCollector,
    Listings,
)
from kubereport.collectors.resources import (
    ResourceTotals,
    format_mib,
    format_mib_decimal,
    format_millicores,
    pod_totals,
    status_quantity,
    sum_totals,
)
from kubereport.constants.defaults import UNKNOWN
from kubereport.constants.enums import ResourceKind, UnitClass
from kubereport.utils.formatting import (
    field,
    name_namespace_key,
    name_of,
    namespace_of,
    node_status,
)

RawObject = dict[str, Any]


def _group_by(items: list[RawObject], path: str) -> dict[str, list[RawObject]]:
    groups: dict[str, list[RawObject]] = defaultdict(list)
    for item in items:
        groups[field(item, path)].append(item)
    return groups


# ============================================================================
# Node Resource Details
# ============================================================================

NODE_RESOURCE_COLUMNS = (
    "Node Name[Status]",
    "CPU Allo(mCPU)",
    "Memory Allo(MiB)",
    "CPU Lim(mCPU)",
    "CPU Req(mCPU)",
    "Memory Lim(MiB)",
    "Memory Req(MiB)",
)


def build_node_resources(listings: Listings, context: CollectContext) -> list[Sequence[str]]:
    pods_by_node = _group_by(listings[ResourceKind.PODS], "spec.nodeName")
    rows = []
    for node in sorted(listings[ResourceKind.NODES], key=name_of):
        name = name_of(node)
        totals = sum_totals(pods_by_node.get(name, []))
        rows.append(
            (
                f"{name} [{node_status(node).value}]",
                format_millicores(status_quantity(node, "allocatable", "cpu", UnitClass.CPU)),
                format_mib(status_quantity(node, "allocatable", "memory", UnitClass.MEMORY)),
                format_millicores(totals.cpu_limits),
                format_millicores(totals.cpu_requests),
                format_mib(totals.memory_limits),
                format_mib(totals.memory_requests),
            )
        )
    return rows


# ============================================================================
# Namespace Resource Details
# ============================================================================

NAMESPACE_RESOURCE_COLUMNS = (
    "Namespace",
    "CPU Req (mCPU)",
    "CPU Lim (mCPU)",
    "Memory Req (MiB)",
    "Memory Lim (MiB)",
)


def _totals_row(label: str, totals: ResourceTotals) -> tuple[str, ...]:
    return (
        label,
        format_millicores(totals.cpu_requests),
        format_millicores(totals.cpu_limits),
        format_mib_decimal(totals.memory_requests),
        format_mib_decimal(totals.memory_limits),
    )


def build_namespace_resources(
    listings: Listings, context: CollectContext
) -> list[Sequence[str]]:
    pods_by_namespace = _group_by(listings[ResourceKind.PODS], "metadata.namespace")
    grand_total = ResourceTotals.zero()
    rows = []
    for namespace in sorted(listings[ResourceKind.NAMESPACES], key=name_of):
        totals = sum_totals(pods_by_namespace.get(name_of(namespace), []))
        grand_total = grand_total + totals
        rows.append(_totals_row(name_of(namespace), totals))
    rows.append(_totals_row("Total", grand_total))
    return rows


# ============================================================================
# Namespace Summary
# ============================================================================

NAMESPACE_SUMMARY_COLUMNS = ("Namespace", "Deployments", "Pods", "Services")


def build_namespace_summary(
    listings: Listings, context: CollectContext
) -> list[Sequence[str]]:
    counts = {
        kind: Counter(namespace_of(item) for item in listings[kind])
        for kind in (ResourceKind.DEPLOYMENTS, ResourceKind.PODS, ResourceKind.SERVICES)
    }
    rows = []
    for namespace in sorted(listings[ResourceKind.NAMESPACES], key=name_of):
        name = name_of(namespace)
        rows.append(
            (
                name,
                str(counts[ResourceKind.DEPLOYMENTS][name]),
                str(counts[ResourceKind.PODS][name]),
                str(counts[ResourceKind.SERVICES][name]),
            )
        )
    return rows


# ============================================================================
# Pod distribution
# ============================================================================


def _distribution(listings: Listings, path: str) -> list[Sequence[str]]:
    counts = Counter(field(pod, path) for pod in listings[ResourceKind.PODS])
    return [(name, f"{counts[name]} pods") for name in sorted(counts)]


def build_pods_by_namespace(listings: Listings, context: CollectContext) -> list[Sequence[str]]:
    return _distribution(listings, "metadata.namespace")


def build_pods_by_node(listings: Listings, context: CollectContext) -> list[Sequence[str]]:
    # Unscheduled pods are grouped under N/A.
    return _distribution(listings, "spec.nodeName")


# ============================================================================
# Pod Resource Details / Pod Status
# ============================================================================

POD_RESOURCE_COLUMNS = (
    "Pod Name",
    "CPU mC req",
    "CPU mC limit",
    "Mem MiB req",
    "Mem MiB limit",
)


def project_pod_resources(pod: RawObject, context: CollectContext) -> tuple[str, ...]:
    totals = pod_totals(pod)
    return (
        name_of(pod),
        format_millicores(totals.cpu_requests),
        format_millicores(totals.cpu_limits),
        format_mib(totals.memory_requests),
        format_mib(totals.memory_limits),
    )


def pod_cpu_request_key(pod: RawObject) -> tuple[int, str, str]:
    """Highest CPU request first, then name and namespace."""
    return (-pod_totals(pod).cpu_requests.value, *name_namespace_key(pod))


def project_pod_status(pod: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (name_of(pod), namespace_of(pod), field(pod, "status.phase", UNKNOWN))


# ============================================================================
# Collector instances
# ============================================================================

node_resources = AggregateCollector(
    kinds=(ResourceKind.NODES, ResourceKind.PODS),
    columns=NODE_RESOURCE_COLUMNS,
    build=build_node_resources,
)
namespace_resources = AggregateCollector(
    kinds=(ResourceKind.NAMESPACES, ResourceKind.PODS),
    columns=NAMESPACE_RESOURCE_COLUMNS,
    build=build_namespace_resources,
)
namespace_summary = AggregateCollector(
    kinds=(
        ResourceKind.NAMESPACES,
        ResourceKind.DEPLOYMENTS,
        ResourceKind.PODS,
        ResourceKind.SERVICES,
    ),
    columns=NAMESPACE_SUMMARY_COLUMNS,
    build=build_namespace_summary,
)
pods_by_namespace = AggregateCollector(
    kinds=(ResourceKind.PODS,),
    columns=("Name", "Value"),
    build=build_pods_by_namespace,
)
pods_by_node = AggregateCollector(
    kinds=(ResourceKind.PODS,),
    columns=("Node", "Value"),
    build=build_pods_by_node,
)
pod_resources = ListCollector(
    kind=ResourceKind.PODS,
    columns=POD_RESOURCE_COLUMNS,
    project=project_pod_resources,
    sort_key=pod_cpu_request_key,
)
pod_status = ListCollector(
    kind=ResourceKind.PODS,
    columns=("Pod Name", "Namespace", "Status"),
    project=project_pod_status,
)

__all__ = [
    "namespace_resources",
    "namespace_summary",
    "node_resources",
    "pod_resources",
    "pod_status",
    "pods_by_namespace",
    "pods_by_node",
]
