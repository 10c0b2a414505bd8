"""Renderer interface and the partial-file lifecycle shared by file sinks."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from kubereport.constants.defaults import ARTIFACT_PREFIX, ARTIFACT_TIMESTAMP_FORMAT
from kubereport.exceptions import RenderIOError
from kubereport.models.record_table import RecordTable
from kubereport.renderers.pagination import TableStyle

logger = logging.getLogger(__name__)


def artifact_name(suffix: str, now: datetime) -> str:
    """Return e.g. "kubernetes_cluster_report_17-10-2026-09-30.pdf"."""
    return f"{ARTIFACT_PREFIX}_{now.strftime(ARTIFACT_TIMESTAMP_FORMAT)}.{suffix}"


class Renderer(ABC):
    """Sink for report sections.

    Call order: open(), then write_title()/render_table() per section, then
    close() on success or abort() on failure.
    """

    @abstractmethod
    def open(self) -> None:
        """Start the artifact and write the preamble."""
        ...

    @abstractmethod
    def write_title(self, title: str) -> None:
        ...

    @abstractmethod
    def render_table(self, table: RecordTable, style: TableStyle | None = None) -> None:
        ...

    @abstractmethod
    def close(self) -> Path:
        """Finish the artifact and return its final path."""
        ...

    @abstractmethod
    def abort(self) -> None:
        """Discard everything written so far."""
        ...


class FileRenderer(Renderer):
    """Renderer that writes a partial file and moves it into place on close.

    The final artifact path only ever holds a complete report; a failed or
    cancelled run leaves at most a partial file, which abort() removes.
    """

    suffix = ""

    def __init__(self, output_dir: str | Path, now: datetime) -> None:
        self.output_dir = Path(output_dir)
        self.artifact_path = self.output_dir / artifact_name(self.suffix, now)
        self.partial_path = self.output_dir / f".{self.artifact_path.name}.partial"

    def _prepare_output_dir(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RenderIOError(self.output_dir, exc) from exc

    def _commit(self) -> Path:
        try:
            os.replace(self.partial_path, self.artifact_path)
        except OSError as exc:
            raise RenderIOError(self.artifact_path, exc) from exc
        logger.info("Wrote report artifact %s", self.artifact_path)
        return self.artifact_path

    def _release(self) -> None:
        """Release open handles; subclasses override when they hold any."""

    def abort(self) -> None:
        self._release()
        try:
            self.partial_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove partial artifact %s: %s", self.partial_path, exc)
        else:
            logger.debug("Removed partial artifact %s", self.partial_path)
