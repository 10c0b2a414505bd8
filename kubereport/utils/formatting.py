"""Cell formatting helpers shared by the collectors.

Every helper turns raw object fields into display strings. Missing optional
fields raise FieldAbsent internally and are replaced with a sentinel here,
so one malformed object never aborts a whole table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from kubereport.constants.defaults import NO_CONDITIONS, NOT_AVAILABLE, UNKNOWN
from kubereport.constants.enums import NodeStatus
from kubereport.exceptions import FieldAbsent

logger = logging.getLogger(__name__)

_MISSING = object()


def require(obj: Any, path: str) -> Any:
    """Return the value at a dotted path.

    Raises:
        FieldAbsent: If any path segment is missing, None or an empty string.
    """
    value: Any = obj
    for part in path.split("."):
        if not isinstance(value, dict):
            raise FieldAbsent(path)
        value = value.get(part, _MISSING)
        if value is _MISSING or value is None:
            raise FieldAbsent(path)
    if value == "":
        raise FieldAbsent(path)
    return value


def field(obj: Any, path: str, default: str = NOT_AVAILABLE) -> str:
    """Return the value at a dotted path as a string, or the sentinel."""
    try:
        return str(require(obj, path))
    except FieldAbsent:
        return default


def get_list(obj: Any, path: str) -> list[Any]:
    """Return the list at a dotted path, or an empty list."""
    try:
        value = require(obj, path)
    except FieldAbsent:
        return []
    return value if isinstance(value, list) else []


def get_mapping(obj: Any, path: str) -> dict[str, Any]:
    """Return the mapping at a dotted path, or an empty dict."""
    try:
        value = require(obj, path)
    except FieldAbsent:
        return {}
    return value if isinstance(value, dict) else {}


def name_of(obj: dict[str, Any]) -> str:
    return field(obj, "metadata.name", UNKNOWN)


def namespace_of(obj: dict[str, Any]) -> str:
    return field(obj, "metadata.namespace", NOT_AVAILABLE)


def name_namespace_key(obj: dict[str, Any]) -> tuple[str, str]:
    """Default sort key: name, then namespace."""
    return (name_of(obj), namespace_of(obj))


# ============================================================================
# Durations
# ============================================================================


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp ("2024-01-01T00:00:00Z") to an aware datetime."""
    if not isinstance(value, str) or not value:
        return None
    text = value.replace("Z", "+00:00") if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparsable timestamp %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_duration(seconds: int) -> str:
    """Render whole seconds the way Go's time.Duration prints them.

    Examples: 0 -> "0s", 90 -> "1m30s", 93600 -> "26h0m0s".
    """
    if seconds == 0:
        return "0s"
    sign = "-" if seconds < 0 else ""
    remaining = abs(seconds)
    hours, remaining = divmod(remaining, 3600)
    minutes, secs = divmod(remaining, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def _round_to_hours(seconds: float) -> int:
    # Halves round away from zero.
    hours = int(abs(seconds) / 3600 + 0.5)
    return hours if seconds >= 0 else -hours


def format_age(
    obj: Any,
    now: datetime,
    path: str = "metadata.creationTimestamp",
    default: str = UNKNOWN,
) -> str:
    """Return now minus the timestamp at path, rounded to the nearest hour."""
    try:
        created = parse_timestamp(require(obj, path))
    except FieldAbsent:
        return default
    if created is None:
        return default
    elapsed = (now - created).total_seconds()
    return format_duration(_round_to_hours(elapsed) * 3600)


def format_elapsed(obj: Any, start_path: str, end_path: str) -> str:
    """Return end minus start as a duration string, or N/A when either is missing."""
    try:
        start = parse_timestamp(require(obj, start_path))
        end = parse_timestamp(require(obj, end_path))
    except FieldAbsent:
        return NOT_AVAILABLE
    if start is None or end is None:
        return NOT_AVAILABLE
    return format_duration(int((end - start).total_seconds()))


# ============================================================================
# Collections
# ============================================================================


def format_conditions(obj: Any, path: str = "status.conditions") -> str:
    """Comma-join the types of conditions whose status is "True"."""
    types = [
        str(condition["type"])
        for condition in get_list(obj, path)
        if isinstance(condition, dict)
        and "type" in condition
        and condition.get("status") == "True"
    ]
    return ", ".join(types) if types else NO_CONDITIONS


def format_mapping(mapping: Mapping[str, Any] | None) -> str:
    """Render a mapping as sorted "key=value" pairs, or N/A when empty."""
    if not mapping:
        return NOT_AVAILABLE
    return ", ".join(f"{key}={mapping[key]}" for key in sorted(mapping))


def format_name_list(names: Iterable[Any]) -> str:
    """Render names as a bracketed list, e.g. "[a, b]"."""
    return "[" + ", ".join(str(name) for name in names) + "]"


def format_joined(values: Iterable[Any], separator: str = ", ") -> str:
    """Join non-empty values, or N/A when nothing is left."""
    parts = [str(value) for value in values if value not in (None, "")]
    return separator.join(parts) if parts else NOT_AVAILABLE


def format_label_selector(selector: Mapping[str, Any] | None) -> str:
    """Render a label selector the way kubectl does ("app=web,tier in (a,b)")."""
    if not selector:
        return NOT_AVAILABLE
    parts = [
        f"{key}={value}"
        for key, value in sorted((selector.get("matchLabels") or {}).items())
    ]
    for expression in selector.get("matchExpressions") or []:
        key = expression.get("key", "")
        operator = expression.get("operator", "")
        values = ",".join(str(v) for v in expression.get("values") or [])
        if operator == "Exists":
            parts.append(key)
        elif operator == "DoesNotExist":
            parts.append(f"!{key}")
        else:
            parts.append(f"{key} {operator.lower()} ({values})")
    return ",".join(parts) if parts else NOT_AVAILABLE


def format_count(values: Any) -> str:
    return str(len(values)) if isinstance(values, (list, dict)) else "0"


# ============================================================================
# Nodes
# ============================================================================


def node_status(node: dict[str, Any]) -> NodeStatus:
    """Return the node's Ready condition as a NodeStatus."""
    for condition in get_list(node, "status.conditions"):
        if isinstance(condition, dict) and condition.get("type") == "Ready":
            if condition.get("status") == "True":
                return NodeStatus.READY
            return NodeStatus.NOT_READY
    return NodeStatus.UNKNOWN


def node_roles(node: dict[str, Any]) -> str:
    """Return the node's roles from node-role.kubernetes.io/* labels."""
    labels = get_mapping(node, "metadata.labels")
    roles = sorted(
        label.split("/", 1)[1]
        for label in labels
        if label.startswith("node-role.kubernetes.io/") and label.split("/", 1)[1]
    )
    return ", ".join(roles) if roles else "worker"


def format_taints(node: dict[str, Any]) -> str:
    """Render taints as "key=value:Effect" entries."""
    taints = []
    for taint in get_list(node, "spec.taints"):
        if not isinstance(taint, dict):
            continue
        taints.append(
            f"{taint.get('key', '')}={taint.get('value', '')}:{taint.get('effect', '')}"
        )
    return ", ".join(taints) if taints else NOT_AVAILABLE
