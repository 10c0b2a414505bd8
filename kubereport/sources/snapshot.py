"""Snapshot data source - serves cluster objects recorded in memory or on disk."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from kubereport.constants.defaults import UNKNOWN
from kubereport.constants.enums import ResourceKind
from kubereport.exceptions import ConfigLoadError
from kubereport.sources.base import DataSource

logger = logging.getLogger(__name__)


class SnapshotDataSource(DataSource):
    """Serves objects from a kind -> items mapping.

    Snapshot files are YAML or JSON documents of the form::

        cluster_name: prod-eu
        resources:
          nodes: [...]
          pods: [...]

    Resource keys are kubectl resource names (see ResourceKind). Kinds missing
    from the snapshot list as empty.
    """

    def __init__(
        self,
        resources: Mapping[ResourceKind | str, Iterable[dict[str, Any]]] | None = None,
        *,
        cluster_name: str = UNKNOWN,
        failing_kinds: Iterable[ResourceKind] = (),
        connected: bool = True,
    ) -> None:
        self._resources: dict[ResourceKind, list[dict[str, Any]]] = {}
        for key, items in (resources or {}).items():
            kind = key if isinstance(key, ResourceKind) else ResourceKind(key)
            self._resources[kind] = list(items)
        self._cluster_name = cluster_name
        self._failing_kinds = frozenset(failing_kinds)
        self._connected = connected
        self.calls: list[tuple[ResourceKind, str | None, str | None]] = []

    @classmethod
    def from_file(cls, path: str | Path) -> SnapshotDataSource:
        """Load a snapshot from a YAML or JSON file.

        Raises:
            ConfigLoadError: If the file cannot be read or has an unexpected shape.
        """
        snapshot_path = Path(path)
        try:
            text = snapshot_path.read_text(encoding="utf-8")
            if snapshot_path.suffix == ".json":
                document = json.loads(text)
            else:
                document = yaml.safe_load(text)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"cannot read snapshot {snapshot_path}: {exc}") from exc

        if not isinstance(document, dict) or not isinstance(
            document.get("resources", {}), dict
        ):
            raise ConfigLoadError(f"snapshot {snapshot_path} must map 'resources' to kinds")

        try:
            return cls(
                document.get("resources", {}),
                cluster_name=str(document.get("cluster_name") or UNKNOWN),
            )
        except ValueError as exc:
            raise ConfigLoadError(f"unknown resource kind in {snapshot_path}: {exc}") from exc

    async def check_connection(self) -> bool:
        return self._connected

    async def cluster_name(self) -> str:
        return self._cluster_name

    @staticmethod
    def _lookup(item: dict[str, Any], path: str) -> Any:
        value: Any = item
        for part in path.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value

    @classmethod
    def _matches(cls, item: dict[str, Any], field_selector: str) -> bool:
        for clause in field_selector.split(","):
            clause = clause.strip()
            if not clause:
                continue
            negate = "!=" in clause
            path, _, expected = clause.partition("!=" if negate else "=")
            expected = expected.lstrip("=")
            actual = cls._lookup(item, path.strip())
            equal = str(actual if actual is not None else "") == expected.strip()
            if equal == negate:
                return False
        return True

    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        self.calls.append((kind, namespace, field_selector))
        if kind in self._failing_kinds:
            raise RuntimeError(f"the server could not list {kind.value}")

        items = self._resources.get(kind, [])
        if namespace:
            items = [
                item
                for item in items
                if item.get("metadata", {}).get("namespace") == namespace
            ]
        if field_selector:
            items = [item for item in items if self._matches(item, field_selector)]
        # Callers get copies so a collector cannot alter the recorded snapshot.
        return copy.deepcopy(items)
