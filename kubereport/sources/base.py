"""Base data source for cluster snapshots.

Collectors only ever read through this interface, so report generation can run
against a live cluster or a recorded snapshot.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from kubereport.constants.enums import ResourceKind

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """Read-only provider of cluster objects, listed by kind.

    Objects are plain dictionaries shaped like the Kubernetes API JSON.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...

    @abstractmethod
    async def cluster_name(self) -> str:
        """Return a human-readable cluster identifier."""
        ...

    @abstractmethod
    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """List all objects of a kind.

        Args:
            kind: Resource kind to list
            namespace: Restrict to one namespace (None lists all namespaces)
            field_selector: Optional "path=value[,path=value]" selector

        Returns:
            List of raw object dictionaries.
        """
        ...
