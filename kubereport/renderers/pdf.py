"""Paginated document renderer built on fpdf2."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException

from kubereport.exceptions import RenderIOError
from kubereport.models.record_table import RecordTable
from kubereport.models.settings import PageSettings
from kubereport.renderers.base import FileRenderer
from kubereport.renderers.pagination import PageCursor, TablePaginator, TableStyle

logger = logging.getLogger(__name__)

REPORT_HEADING = "KUBEREPORT"
REPORT_SUBTITLE = "Kubernetes Cluster Qualification Report"

SECTION_TITLE_HEIGHT = 10.0
SECTION_GAP = 4.0
HEADER_FILL_GRAY = 225


def latin1(text: str) -> str:
    """Core PDF fonts only cover latin-1; anything else becomes '?'."""
    return text.encode("latin-1", "replace").decode("latin-1")


class ReportDocument(FPDF):
    """FPDF document that also serves as the TablePaginator drawing surface."""

    def __init__(self, page: PageSettings) -> None:
        super().__init__(orientation=page.orientation, unit="mm", format=page.format)
        self.page_settings = page
        self.set_margins(page.margin, page.margin, page.margin)
        self.set_auto_page_break(False)

    def footer(self) -> None:
        margin = self.page_settings.margin
        if margin <= 0:
            return
        self.set_font(self.page_settings.font_family, "I", 7)
        self.set_xy(self.l_margin, self.h - margin * 0.75)
        self.cell(self.w - self.l_margin - self.r_margin, 4, f"Page {self.page_no()}", align="R")

    # ========================================================================
    # TableSurface
    # ========================================================================

    def _table_font(self, header: bool) -> None:
        page = self.page_settings
        self.set_font(page.font_family, "B" if header else "", page.table_font_size)

    def measure(self, text: str, header: bool) -> float:
        self._table_font(header)
        return self.get_string_width(latin1(text))

    def draw_row(
        self,
        y: float,
        widths: Sequence[float],
        lines: Sequence[Sequence[str]],
        height: float,
        header: bool,
    ) -> None:
        page = self.page_settings
        self._table_font(header)
        if header:
            self.set_fill_color(HEADER_FILL_GRAY)
        x = self.l_margin
        for width, cell_lines in zip(widths, lines):
            self.rect(x, y, width, height, style="DF" if header else "D")
            # Single-line cells are centred vertically in taller rows.
            offset = (height - page.line_height) / 2 if len(cell_lines) == 1 else 0.0
            for index, line in enumerate(cell_lines):
                line_y = y + offset + index * page.line_height
                # Rows clipped at the page bottom drop their overflow lines.
                if index and line_y + page.line_height > y + height + 1e-6:
                    break
                self.set_xy(x + page.cell_padding, line_y)
                self.cell(max(width - 2 * page.cell_padding, 0), page.line_height, latin1(line))
            x += width


class PaginatedRenderer(FileRenderer):
    """Renders sections as titled, bordered tables on fixed-size pages."""

    suffix = "pdf"

    def __init__(
        self, output_dir: str | Path, now: datetime, page: PageSettings | None = None
    ) -> None:
        super().__init__(output_dir, now)
        self.page = page or PageSettings()
        self.now = now
        self._document: ReportDocument | None = None
        self._cursor: PageCursor | None = None
        self._pending_title: str | None = None

    @property
    def printable_width(self) -> float:
        document = self._require_document()
        return document.w - document.l_margin - document.r_margin

    def _require_document(self) -> ReportDocument:
        if self._document is None:
            raise RenderIOError(self.partial_path, "renderer is not open")
        return self._document

    def _require_cursor(self) -> PageCursor:
        if self._cursor is None:
            raise RenderIOError(self.partial_path, "renderer is not open")
        return self._cursor

    def _new_page(self) -> None:
        self._require_document().add_page()
        self._require_cursor().reset()

    def _write_heading(self) -> None:
        document = self._require_document()
        cursor = self._require_cursor()
        page = self.page
        width = self.printable_width

        document.set_font(page.font_family, "B", page.title_font_size + 6)
        document.set_xy(document.l_margin, cursor.y)
        document.cell(width, 12, REPORT_HEADING, align="C")
        cursor.advance(12)

        document.set_font(page.font_family, "B", page.title_font_size)
        document.set_xy(document.l_margin, cursor.y)
        document.cell(width, 10, REPORT_SUBTITLE, align="C")
        cursor.advance(10)

        document.set_font(page.font_family, "", page.table_font_size + 1)
        document.set_xy(document.l_margin, cursor.y)
        document.cell(width, 6, self.now.strftime("Generated %Y-%m-%d %H:%M %Z").strip(), align="C")
        cursor.advance(6 + SECTION_GAP)

    def open(self) -> None:
        self._prepare_output_dir()
        try:
            self._document = ReportDocument(self.page)
        except FPDFException as exc:
            raise RenderIOError(self.partial_path, exc) from exc
        self._document.add_page()
        self._pending_title = None
        self._cursor = PageCursor(
            y=self._document.t_margin,
            page_height=self._document.h,
            top_margin=self.page.margin,
            bottom_margin=self.page.margin,
        )
        self._write_heading()
        logger.debug(
            "Opened %s document (%.0fx%.0f mm)", self.page.format, self._document.w, self._document.h
        )

    def write_title(self, title: str) -> None:
        """Queue a section title; it is drawn with the next table.

        Drawing waits until the table's wrapped header and first row are
        measured, so the title never ends up alone at the foot of a page.
        """
        self._require_document()
        self._flush_title()
        self._pending_title = title.strip()

    def _draw_title(self, title: str, following: float) -> None:
        document = self._require_document()
        cursor = self._require_cursor()
        if not cursor.fits(SECTION_TITLE_HEIGHT + following) and not cursor.at_top:
            self._new_page()
        document.set_font(self.page.font_family, "B", self.page.section_font_size)
        document.set_xy(document.l_margin, cursor.y)
        document.cell(self.printable_width, SECTION_TITLE_HEIGHT, latin1(title))
        cursor.advance(SECTION_TITLE_HEIGHT)

    def _flush_title(self) -> None:
        """Draw a queued title that no table followed."""
        if self._pending_title is not None:
            title, self._pending_title = self._pending_title, None
            self._draw_title(title, 0.0)

    def _table_style(self, style: TableStyle | None) -> TableStyle:
        return TableStyle(
            col_widths=style.col_widths if style else None,
            min_row_height=self.page.row_height,
            line_height=self.page.line_height,
            cell_padding=self.page.cell_padding,
        )

    def render_table(self, table: RecordTable, style: TableStyle | None = None) -> None:
        document = self._require_document()
        cursor = self._require_cursor()
        paginator = TablePaginator(
            document, cursor, self.printable_width, self._table_style(style)
        )
        start_height = paginator.prepare(table.columns, table.rows)
        if self._pending_title is not None:
            title, self._pending_title = self._pending_title, None
            self._draw_title(title, start_height)
        paginator.render(table.columns, table.rows)
        logger.debug("Laid out %d rows with %d page breaks", len(table), paginator.page_breaks)

        if cursor.fits(SECTION_GAP):
            line_y = cursor.y + SECTION_GAP / 2
            document.set_draw_color(160)
            document.line(document.l_margin, line_y, document.w - document.r_margin, line_y)
            document.set_draw_color(0)
            cursor.advance(SECTION_GAP)

    def _release(self) -> None:
        self._document = None
        self._cursor = None
        self._pending_title = None

    def close(self) -> Path:
        document = self._require_document()
        self._flush_title()
        try:
            document.output(str(self.partial_path))
        except OSError as exc:
            raise RenderIOError(self.partial_path, exc) from exc
        finally:
            self._release()
        return self._commit()
