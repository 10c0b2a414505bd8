"""All enum definitions for KubeReport.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum, auto

# =============================================================================
# Status Enums
# =============================================================================

class NodeStatus(Enum):
    """Node status values from Kubernetes API."""

    READY = "Ready"
    NOT_READY = "NotReady"
    UNKNOWN = "Unknown"


# =============================================================================
# Quantity Enums
# =============================================================================

class UnitClass(Enum):
    """Unit class of a resource quantity.

    CPU is stored in millicores, MEMORY and STORAGE in bytes.
    """

    CPU = "cpu"
    MEMORY = "memory"
    STORAGE = "storage"


class DisplayUnit(Enum):
    """Presentation units a quantity can be scaled to."""

    MILLICORES = "mCPU"
    CORES = "cores"
    BYTES = "B"
    KIB = "KiB"
    MIB = "MiB"
    GIB = "GiB"


# =============================================================================
# Resource Kinds
# =============================================================================

class ResourceKind(Enum):
    """Resource kinds listed from the data source (kubectl resource names)."""

    NODES = "nodes"
    NODE_METRICS = "nodes.metrics.k8s.io"
    NAMESPACES = "namespaces"
    PODS = "pods"
    DEPLOYMENTS = "deployments"
    SERVICES = "services"
    ENDPOINTS = "endpoints"
    REPLICASETS = "replicasets"
    STATEFULSETS = "statefulsets"
    DAEMONSETS = "daemonsets"
    CONFIGMAPS = "configmaps"
    SECRETS = "secrets"
    SERVICEACCOUNTS = "serviceaccounts"
    PERSISTENT_VOLUMES = "persistentvolumes"
    PERSISTENT_VOLUME_CLAIMS = "persistentvolumeclaims"
    STORAGE_CLASSES = "storageclasses"
    INGRESSES = "ingresses"
    NETWORK_POLICIES = "networkpolicies"
    RESOURCE_QUOTAS = "resourcequotas"
    LIMIT_RANGES = "limitranges"
    HORIZONTAL_POD_AUTOSCALERS = "horizontalpodautoscalers"
    JOBS = "jobs"
    CRONJOBS = "cronjobs"
    ROLES = "roles"
    ROLE_BINDINGS = "rolebindings"
    CLUSTER_ROLES = "clusterroles"
    CLUSTER_ROLE_BINDINGS = "clusterrolebindings"


CLUSTER_SCOPED_KINDS = frozenset(
    {
        ResourceKind.NODES,
        ResourceKind.NODE_METRICS,
        ResourceKind.NAMESPACES,
        ResourceKind.PERSISTENT_VOLUMES,
        ResourceKind.STORAGE_CLASSES,
        ResourceKind.CLUSTER_ROLES,
        ResourceKind.CLUSTER_ROLE_BINDINGS,
    }
)


# =============================================================================
# Report Enums
# =============================================================================

class ReportType(Enum):
    """Report flavours; each maps to one renderer and one section list."""

    GENERAL = "general"  # paginated PDF
    DETAILED = "detailed"  # delimited text


class RenderState(Enum):
    """States of the paginated table state machine."""

    AWAITING_HEADER = auto()
    RENDERING_ROWS = auto()
    PAGE_BREAK_PENDING = auto()
    SECTION_DONE = auto()


__all__ = [
    "CLUSTER_SCOPED_KINDS",
    "DisplayUnit",
    "NodeStatus",
    "RenderState",
    "ReportType",
    "ResourceKind",
    "UnitClass",
]
