"""Timeout constants for cluster access.

kubectl request timeouts are duration strings; process timeouts are seconds.
"""

from typing import Final

# ============================================================================
# kubectl --request-timeout
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# ============================================================================
# subprocess timeouts (seconds)
# ============================================================================

# Always above the request timeout so kubectl reports its own error first.
KUBECTL_COMMAND_TIMEOUT: Final = 45
KUBECTL_CONFIG_TIMEOUT: Final = 8
CLUSTER_CHECK_TIMEOUT: Final = 12.0

__all__ = [
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "KUBECTL_CONFIG_TIMEOUT",
]
