"""Generic collector harness.

Two strategy objects cover every resource kind:

- ListCollector: one list call, one projected row per object, then a sort.
- AggregateCollector: a bounded set of list calls handed to a build function
  that rolls objects up into summary rows.

Per-kind behaviour is configuration (columns, projection, sort key), not
subclassing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

from kubereport.constants.enums import ResourceKind
from kubereport.exceptions import CollectionUnavailable
from kubereport.models.record_table import RecordTable
from kubereport.sources.base import DataSource
from kubereport.utils.formatting import name_namespace_key

logger = logging.getLogger(__name__)

RawObject = dict[str, Any]
Listings = Mapping[ResourceKind, list[RawObject]]
Projection = Callable[[RawObject, "CollectContext"], Sequence[Any]]
SortKey = Callable[[RawObject], Any]
Builder = Callable[[Listings, "CollectContext"], Sequence[Sequence[Any]]]


@dataclass(frozen=True)
class CollectContext:
    """Per-run values shared by all collectors."""

    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@runtime_checkable
class Collector(Protocol):
    """Anything that can turn a data source into one record table."""

    columns: tuple[str, ...]

    async def collect(self, source: DataSource, context: CollectContext) -> RecordTable:
        ...


async def list_kind(
    source: DataSource,
    kind: ResourceKind,
    *,
    namespace: str | None = None,
    field_selector: str | None = None,
) -> list[RawObject]:
    """List one kind, translating source failures into CollectionUnavailable."""
    try:
        items = await source.list_objects(
            kind, namespace=namespace, field_selector=field_selector
        )
    except (RuntimeError, OSError, ValueError) as exc:
        logger.error("Listing %s failed: %s", kind.value, exc)
        raise CollectionUnavailable(kind, exc) from exc
    logger.debug("Listed %d %s", len(items), kind.value)
    return items


@dataclass(frozen=True)
class ListCollector:
    """One row per listed object.

    Attributes:
        kind: Primary resource kind.
        columns: Header cells.
        project: Maps (object, context) to one row of cells.
        sort_key: Ordering for objects; defaults to (name, namespace).
    """

    kind: ResourceKind
    columns: tuple[str, ...]
    project: Projection
    sort_key: SortKey = name_namespace_key

    async def collect(self, source: DataSource, context: CollectContext) -> RecordTable:
        items = await list_kind(source, self.kind)
        return RecordTable.from_records(
            self.columns,
            items,
            lambda item: self.project(item, context),
            sort_key=self.sort_key,
        )


@dataclass(frozen=True)
class AggregateCollector:
    """Rows computed from several listings at once.

    The build function receives every listing keyed by kind and returns rows
    already in their final order.
    """

    kinds: tuple[ResourceKind, ...]
    columns: tuple[str, ...]
    build: Builder

    async def collect(self, source: DataSource, context: CollectContext) -> RecordTable:
        listings: dict[ResourceKind, list[RawObject]] = {}
        for kind in self.kinds:
            listings[kind] = await list_kind(source, kind)
        table = RecordTable(columns=self.columns)
        for row in self.build(listings, context):
            table.add_row(row)
        return table
