"""Section catalogues for the general and detailed reports."""

from __future__ import annotations

from dataclasses import dataclass

from kubereport.collectors import detailed, general
from kubereport.collectors.base import Collector
from kubereport.collectors.cluster import cluster_summary_collector
from kubereport.constants.enums import ReportType
from kubereport.renderers.pagination import TableStyle


@dataclass(frozen=True)
class Section:
    """A titled table: what to collect and how to lay it out."""

    title: str
    collector: Collector
    style: TableStyle | None = None


# ============================================================================
# General report (paginated)
# ============================================================================

GENERAL_SECTIONS: tuple[Section, ...] = (
    Section(
        "Cluster Resource Details",
        cluster_summary_collector(),
        TableStyle(col_widths=(50.0, 50.0, 50.0)),
    ),
    Section(
        "Node Resource Details",
        general.node_resources,
        TableStyle(col_widths=(78.0,) + (20.0,) * 6),
    ),
    Section(
        "Namespace Resource Details",
        general.namespace_resources,
        TableStyle(col_widths=(38.0,) * 5),
    ),
    Section(
        "Namespace Summary",
        general.namespace_summary,
        TableStyle(col_widths=(90.0, 30.0, 30.0, 30.0)),
    ),
    Section(
        "Pod Distribution By Namespace",
        general.pods_by_namespace,
        TableStyle(col_widths=(95.0, 30.0)),
    ),
    Section(
        "Pod Distribution By Node",
        general.pods_by_node,
        TableStyle(col_widths=(95.0, 30.0)),
    ),
    Section(
        "Pod Resource Details",
        general.pod_resources,
        TableStyle(col_widths=(38.0,) * 5),
    ),
    Section(
        "Pod Status",
        general.pod_status,
        TableStyle(col_widths=(88.0, 88.0, 20.0)),
    ),
)

# ============================================================================
# Detailed report (delimited)
# ============================================================================

DETAILED_SECTIONS: tuple[Section, ...] = (
    Section("[ CLUSTER RESOURCE DETAILS ]", cluster_summary_collector()),
    Section("[ NODE RESOURCE DETAILS ]", detailed.nodes),
    Section("[ NAMESPACE DETAILS ]", detailed.namespaces),
    Section("[ POD DETAILS ]", detailed.pods),
    Section("[ DEPLOYMENT DETAILS ]", detailed.deployments),
    Section("[ SERVICE DETAILS ]", detailed.services),
    Section("[ ENDPOINTS DETAILS ]", detailed.endpoints),
    Section("[ REPLICASET DETAILS ]", detailed.replicasets),
    Section("[ STATEFULSET DETAILS ]", detailed.statefulsets),
    Section("[ DAEMONSETS DETAILS ]", detailed.daemonsets),
    Section("[ CONFIGMAP DETAILS ]", detailed.configmaps),
    Section("[ SECRET DETAILS ]", detailed.secrets),
    Section("[ SERVICEACCOUNT DETAILS ]", detailed.serviceaccounts),
    Section("[ PERSISTENT VOLUMES DETAILS ]", detailed.persistent_volumes),
    Section("[ PERSISTENT VOLUME CLAIM DETAILS ]", detailed.persistent_volume_claims),
    Section("[ STORAGE CLASS DETAILS ]", detailed.storage_classes),
    Section("[ INGRESS RESOURCES DETAILS ]", detailed.ingresses),
    Section("[ NETWORK POLICY DETAILS ]", detailed.network_policies),
    Section("[ RESOURCE QUOTA DETAILS ]", detailed.resource_quotas),
    Section("[ LIMIT RANGE DETAILS ]", detailed.limit_ranges),
    Section("[ HORIZONTAL POD AUTOSCALERS DETAILS ]", detailed.horizontal_pod_autoscalers),
    Section("[ JOB DETAILS ]", detailed.jobs),
    Section("[ CRONJOB DETAILS ]", detailed.cronjobs),
    Section("[ ROLE DETAILS ]", detailed.roles),
    Section("[ ROLEBINDING DETAILS ]", detailed.role_bindings),
    Section("[ CLUSTERROLE DETAILS ]", detailed.cluster_roles),
    Section("[ CLUSTERROLEBINDING DETAILS ]", detailed.cluster_role_bindings),
)


def sections_for(report_type: ReportType) -> tuple[Section, ...]:
    if report_type is ReportType.DETAILED:
        return DETAILED_SECTIONS
    return GENERAL_SECTIONS


__all__ = ["DETAILED_SECTIONS", "GENERAL_SECTIONS", "Section", "sections_for"]
