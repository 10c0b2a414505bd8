"""Resource collectors: data source listings projected into record tables."""

from kubereport.collectors.base import (
    AggregateCollector,
    CollectContext,
    Collector,
    ListCollector,
    list_kind,
)
from kubereport.collectors.cluster import (
    CLUSTER_SUMMARY_COLUMNS,
    ClusterCapacity,
    cluster_summary_collector,
    compute_capacity,
)

__all__ = [
    "CLUSTER_SUMMARY_COLUMNS",
    "AggregateCollector",
    "ClusterCapacity",
    "CollectContext",
    "Collector",
    "ListCollector",
    "cluster_summary_collector",
    "compute_capacity",
    "list_kind",
]
