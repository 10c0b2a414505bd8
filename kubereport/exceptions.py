"""Exception hierarchy for report generation."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class KubeReportError(Exception):
    """Base exception for all report generation errors."""


class DataSourceUnavailable(KubeReportError):
    """Raised when no session to the cluster can be established."""


class CollectionUnavailable(KubeReportError):
    """Raised when a collector cannot list one of its collections."""

    def __init__(self, kind: Any, cause: BaseException | str) -> None:
        self.kind = getattr(kind, "value", kind)
        self.cause = cause
        super().__init__(f"failed to list {self.kind}: {cause}")


class FieldAbsent(KubeReportError):
    """Raised by field helpers when an optional item field is missing.

    Always recovered inside the collector with a sentinel cell value.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"field {path!r} is absent")


class UnitClassMismatch(KubeReportError):
    """Raised when quantities of different unit classes are combined."""

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"cannot combine {getattr(left, 'value', left)} "
            f"with {getattr(right, 'value', right)} quantities"
        )


class RenderIOError(KubeReportError):
    """Raised when the output artifact cannot be written."""

    def __init__(self, path: Path | str, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"cannot write report artifact {self.path}: {cause}")


class SectionFailedError(KubeReportError):
    """Raised by the orchestrator when a section aborts the run."""

    def __init__(self, title: str, cause: BaseException) -> None:
        self.title = title
        self.cause = cause
        super().__init__(f"failed to generate {title.strip()}: {cause}")


class ReportInProgressError(KubeReportError):
    """Raised when a report run is requested while another is in flight."""


class ConfigError(KubeReportError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


__all__ = [
    "CollectionUnavailable",
    "ConfigError",
    "ConfigLoadError",
    "DataSourceUnavailable",
    "FieldAbsent",
    "KubeReportError",
    "RenderIOError",
    "ReportInProgressError",
    "SectionFailedError",
    "UnitClassMismatch",
]
