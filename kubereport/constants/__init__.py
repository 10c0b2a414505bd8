"""Constants module for KubeReport.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- timeouts.py: Timeout values (seconds / kubectl duration strings)
- defaults.py: Default values for settings and cell sentinels
"""

from kubereport.constants.defaults import (
    ARTIFACT_PREFIX,
    ARTIFACT_TIMESTAMP_FORMAT,
    NO_CONDITIONS,
    NOT_AVAILABLE,
    UNKNOWN,
)
from kubereport.constants.enums import (
    CLUSTER_SCOPED_KINDS,
    DisplayUnit,
    NodeStatus,
    RenderState,
    ReportType,
    ResourceKind,
    UnitClass,
)
from kubereport.constants.timeouts import (
    CLUSTER_CHECK_TIMEOUT,
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)

__all__ = [
    "ARTIFACT_PREFIX",
    "ARTIFACT_TIMESTAMP_FORMAT",
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "CLUSTER_SCOPED_KINDS",
    "KUBECTL_COMMAND_TIMEOUT",
    "NOT_AVAILABLE",
    "NO_CONDITIONS",
    "UNKNOWN",
    "DisplayUnit",
    "NodeStatus",
    "RenderState",
    "ReportType",
    "ResourceKind",
    "UnitClass",
]
