"""Paginated table layout as an explicit state machine.

TablePaginator decides where rows go and when pages break; it never draws
directly. Drawing goes through the TableSurface protocol, so page-break
logic can be tested with a fake surface and a fixed-width font.

States::

    AWAITING_HEADER -> RENDERING_ROWS <-> PAGE_BREAK_PENDING
                       RENDERING_ROWS  -> SECTION_DONE
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from kubereport.constants.defaults import LINE_HEIGHT_DEFAULT, ROW_HEIGHT_DEFAULT
from kubereport.constants.enums import RenderState

logger = logging.getLogger(__name__)

Measure = Callable[[str], float]


@dataclass
class PageCursor:
    """Vertical write position on the current page (user units, usually mm)."""

    y: float
    page_height: float
    top_margin: float
    bottom_margin: float

    @property
    def limit(self) -> float:
        return self.page_height - self.bottom_margin

    @property
    def remaining(self) -> float:
        return self.limit - self.y

    @property
    def at_top(self) -> bool:
        return self.y <= self.top_margin

    def fits(self, height: float) -> bool:
        """True when a block of this height can be committed on the current page."""
        return self.y + height <= self.limit

    def advance(self, height: float) -> None:
        self.y += height

    def reset(self) -> None:
        self.y = self.top_margin


@dataclass(frozen=True)
class TableStyle:
    """Per-section table layout.

    Attributes:
        col_widths: Fixed column widths; None splits the printable width evenly.
        min_row_height: Height of a single-line row; taller text grows the row.
        line_height: Height of one wrapped text line.
        cell_padding: Horizontal padding inside each cell.
    """

    col_widths: tuple[float, ...] | None = None
    min_row_height: float = ROW_HEIGHT_DEFAULT
    line_height: float = LINE_HEIGHT_DEFAULT
    cell_padding: float = 1.0


class TableSurface(Protocol):
    """Drawing backend used by TablePaginator."""

    def measure(self, text: str, header: bool) -> float:
        """Width of text in the header or body font."""
        ...

    def add_page(self) -> None:
        ...

    def draw_row(
        self,
        y: float,
        widths: Sequence[float],
        lines: Sequence[Sequence[str]],
        height: float,
        header: bool,
    ) -> None:
        """Draw one row of cells at y; lines[i] holds the wrapped text of cell i."""
        ...


def _hard_break(word: str, width: float, measure: Measure) -> list[str]:
    pieces: list[str] = []
    piece = ""
    for char in word:
        if piece and measure(piece + char) > width:
            pieces.append(piece)
            piece = char
        else:
            piece += char
    pieces.append(piece)
    return pieces


def wrap_text(text: str, width: float, measure: Measure) -> list[str]:
    """Greedy word wrap.

    Explicit newlines start a new line, words wider than the column are broken
    by character, and at least one (possibly empty) line is always returned.
    The result depends only on (text, width, measure).
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            if measure(word) <= width:
                current = word
                continue
            *full, current = _hard_break(word, width, measure)
            lines.extend(full)
        lines.append(current)
    return lines or [""]


def column_widths(
    style: TableStyle, column_count: int, printable_width: float
) -> list[float]:
    """Fixed widths (scaled down to the printable width) or an even split."""
    if column_count == 0:
        return []
    if style.col_widths and len(style.col_widths) == column_count:
        total = sum(style.col_widths)
        if total > printable_width:
            factor = printable_width / total
            return [width * factor for width in style.col_widths]
        return list(style.col_widths)
    if style.col_widths:
        logger.warning(
            "Ignoring %d fixed widths for a %d-column table",
            len(style.col_widths),
            column_count,
        )
    return [printable_width / column_count] * column_count


class TablePaginator:
    """Lays out one table across pages through a TableSurface."""

    def __init__(
        self,
        surface: TableSurface,
        cursor: PageCursor,
        printable_width: float,
        style: TableStyle | None = None,
    ) -> None:
        self.surface = surface
        self.cursor = cursor
        self.printable_width = printable_width
        self.style = style or TableStyle()
        self.state = RenderState.AWAITING_HEADER
        self.page_breaks = 0
        self._widths: list[float] = []
        self._header_lines: list[list[str]] = []
        self._header_height = 0.0
        self._wrapped: list[list[list[str]]] | None = None
        self._rows_on_page = 0

    def _wrap_cells(self, cells: Sequence[str], header: bool) -> list[list[str]]:
        pad = 2 * self.style.cell_padding
        return [
            wrap_text(
                cell,
                max(width - pad, 0.0),
                lambda text: self.surface.measure(text, header),
            )
            for cell, width in zip(cells, self._widths)
        ]

    def _row_height(self, lines: list[list[str]]) -> float:
        line_count = max((len(cell) for cell in lines), default=1)
        return max(self.style.min_row_height, line_count * self.style.line_height)

    def _draw(self, lines: list[list[str]], height: float, header: bool) -> None:
        self.surface.draw_row(self.cursor.y, self._widths, lines, height, header)
        self.cursor.advance(height)

    def _break_page(self) -> None:
        self.surface.add_page()
        self.cursor.reset()
        self.page_breaks += 1
        self._rows_on_page = 0

    @property
    def start_height(self) -> float:
        """Height of the wrapped header plus the first row; needs prepare()."""
        if self._wrapped is None:
            raise RuntimeError("paginator has not been prepared")
        needed = self._header_height
        if self._wrapped:
            needed += self._row_height(self._wrapped[0])
        return needed

    def prepare(self, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> float:
        """Wrap the header and rows for layout and return start_height."""
        if self.state is not RenderState.AWAITING_HEADER:
            raise RuntimeError(f"paginator already used (state {self.state.name})")
        self._widths = column_widths(self.style, len(columns), self.printable_width)
        self._header_lines = self._wrap_cells(columns, header=True)
        self._header_height = self._row_height(self._header_lines)
        self._wrapped = [self._wrap_cells(row, header=False) for row in rows]
        return self.start_height

    def _start(self) -> None:
        """AWAITING_HEADER: place the header, breaking first if it cannot fit."""
        if not self.cursor.fits(self.start_height) and not self.cursor.at_top:
            self._break_page()
        self._draw(self._header_lines, self._header_height, header=True)
        self.state = RenderState.RENDERING_ROWS

    def _place_row(self, lines: list[list[str]]) -> None:
        """RENDERING_ROWS: commit a row, going through PAGE_BREAK_PENDING when full."""
        height = self._row_height(lines)
        if not self.cursor.fits(height) and self._rows_on_page:
            self.state = RenderState.PAGE_BREAK_PENDING
            self._break_page()
            self._draw(self._header_lines, self._header_height, header=True)
            self.state = RenderState.RENDERING_ROWS
        if not self.cursor.fits(height):
            # Taller than the space under a fresh header: draw clipped rather than loop.
            logger.warning("Row of height %.1f clipped to fit the page", height)
            height = max(self.cursor.remaining, 0.0)
        self._draw(lines, height, header=False)
        self._rows_on_page += 1

    def render(self, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        """Lay out the header and every row, ending in SECTION_DONE.

        A paginator already prepared with the same table skips re-wrapping.
        """
        if self._wrapped is None or self.state is not RenderState.AWAITING_HEADER:
            self.prepare(columns, rows)
        assert self._wrapped is not None

        self._start()
        for lines in self._wrapped:
            self._place_row(lines)
        self.state = RenderState.SECTION_DONE


def rows_per_page(
    page_height: float, margin: float, row_height: float, header_height: float = 0.0
) -> int:
    """Data rows that fit on a fresh page with fixed-height rows.

    TablePaginator repeats the header on every page, so its pages hold
    ``rows_per_page(..., header_height=...)`` rows. The default
    ``header_height=0`` is the bare ``floor((H - 2M) / R)`` figure and matches
    no layout the paginator produces.
    """
    return int((page_height - 2 * margin - header_height) // row_height)
