"""Delimited-text (CSV) renderer."""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import IO, Any

from kubereport.exceptions import RenderIOError
from kubereport.models.record_table import RecordTable
from kubereport.renderers.base import FileRenderer
from kubereport.renderers.pagination import TableStyle

logger = logging.getLogger(__name__)

REPORT_BANNER = "KUBE☸️REPORT"


class DelimitedRenderer(FileRenderer):
    """Writes each section as a title record, a header, data rows and a blank record.

    Fields are quoted only when needed (QUOTE_MINIMAL) and embedded quotes are
    doubled, so csv.reader reads back exactly the cells that were written.
    """

    suffix = "csv"

    def __init__(self, output_dir: str | Path, now: datetime, delimiter: str = ",") -> None:
        super().__init__(output_dir, now)
        self.delimiter = delimiter
        self._handle: IO[str] | None = None
        self._writer: Any = None

    def _write(self, record: list[str]) -> None:
        if self._handle is None:
            raise RenderIOError(self.partial_path, "renderer is not open")
        try:
            self._writer.writerow(record)
        except OSError as exc:
            raise RenderIOError(self.partial_path, exc) from exc

    def open(self) -> None:
        self._prepare_output_dir()
        try:
            self._handle = self.partial_path.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise RenderIOError(self.partial_path, exc) from exc
        self._writer = csv.writer(
            self._handle, delimiter=self.delimiter, quoting=csv.QUOTE_MINIMAL
        )
        self._write([REPORT_BANNER])

    def write_title(self, title: str) -> None:
        self._write([title])

    def render_table(self, table: RecordTable, style: TableStyle | None = None) -> None:
        self._write(list(table.columns))
        for row in table.rows:
            self._write(list(row))
        self._write([])
        logger.debug("Wrote %d rows", len(table))

    def _release(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def close(self) -> Path:
        try:
            if self._handle is not None:
                self._handle.flush()
        except OSError as exc:
            raise RenderIOError(self.partial_path, exc) from exc
        finally:
            self._release()
        return self._commit()
