"""Tests for the table pagination state machine."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from kubereport.constants.enums import RenderState
from kubereport.renderers.pagination import (
    PageCursor,
    TablePaginator,
    TableStyle,
    column_widths,
    rows_per_page,
    wrap_text,
)

PAGE_HEIGHT = 297.0
MARGIN = 10.0
ROW = 8.0


class FakeSurface:
    """Fixed-width font surface that records what was drawn on which page."""

    def __init__(self, char_width: float = 2.0) -> None:
        self.char_width = char_width
        self.page = 1
        self.rows: list[tuple[int, bool, float, float, list[list[str]]]] = []

    def measure(self, text: str, header: bool) -> float:
        return len(text) * self.char_width

    def add_page(self) -> None:
        self.page += 1

    def draw_row(
        self,
        y: float,
        widths: Sequence[float],
        lines: Sequence[Sequence[str]],
        height: float,
        header: bool,
    ) -> None:
        self.rows.append((self.page, header, y, height, [list(cell) for cell in lines]))


def _cursor(y: float = MARGIN) -> PageCursor:
    return PageCursor(y=y, page_height=PAGE_HEIGHT, top_margin=MARGIN, bottom_margin=MARGIN)


def _paginate(
    rows: list[tuple[str, ...]], cursor: PageCursor | None = None, style: TableStyle | None = None
) -> tuple[FakeSurface, TablePaginator]:
    surface = FakeSurface()
    paginator = TablePaginator(
        surface, cursor or _cursor(), PAGE_HEIGHT - 2 * MARGIN, style or TableStyle(min_row_height=ROW)
    )
    paginator.render(("NAME", "VALUE"), rows)
    return surface, paginator


class TestWrapText:
    """Tests for wrap_text."""

    def test_greedy(self) -> None:
        """Test words are packed greedily."""
        assert wrap_text("aaa bbb ccc", 7, len) == ["aaa bbb", "ccc"]

    def test_hard_break(self) -> None:
        """Test words wider than the column are split by character."""
        assert wrap_text("abcdefghij", 4, len) == ["abcd", "efgh", "ij"]

    def test_newlines(self) -> None:
        """Test explicit newlines start new lines."""
        assert wrap_text("a\nb", 10, len) == ["a", "b"]

    def test_empty(self) -> None:
        """Test empty text still yields one line."""
        assert wrap_text("", 10, len) == [""]

    def test_deterministic(self) -> None:
        """Test identical input gives identical output."""
        text = "kube-system coredns-5d78c9869d-abcde Running"
        assert wrap_text(text, 12, len) == wrap_text(text, 12, len)


class TestColumnWidths:
    """Tests for column_widths."""

    def test_even_split(self) -> None:
        """Test columns share the printable width."""
        assert column_widths(TableStyle(), 4, 200.0) == [50.0] * 4

    def test_fixed(self) -> None:
        """Test fixed widths are kept when they fit."""
        assert column_widths(TableStyle(col_widths=(95.0, 30.0)), 2, 190.0) == [95.0, 30.0]

    def test_fixed_scaled_down(self) -> None:
        """Test fixed widths wider than the page are scaled proportionally."""
        widths = column_widths(TableStyle(col_widths=(88.0, 88.0, 20.0)), 3, 190.0)
        assert sum(widths) == pytest.approx(190.0)
        assert widths[0] == pytest.approx(widths[1])

    def test_mismatch_falls_back(self) -> None:
        """Test a wrong number of fixed widths falls back to an even split."""
        assert column_widths(TableStyle(col_widths=(10.0,)), 2, 100.0) == [50.0, 50.0]

    def test_no_columns(self) -> None:
        """Test an empty header has no widths."""
        assert column_widths(TableStyle(), 0, 100.0) == []


class TestTablePaginator:
    """Tests for TablePaginator page breaking."""

    def test_rows_per_page_formula(self) -> None:
        """Test the fixed-row capacity formula."""
        assert rows_per_page(PAGE_HEIGHT, MARGIN, ROW, header_height=ROW) == 33
        assert rows_per_page(PAGE_HEIGHT, MARGIN, ROW) == 34

    def test_page_count(self) -> None:
        """Test 100 fixed-height rows need ceil(100 / 33) pages."""
        surface, paginator = _paginate([(f"pod-{i}", "1") for i in range(100)])

        assert surface.page == 4
        assert paginator.page_breaks == 3
        assert paginator.state is RenderState.SECTION_DONE
        body_pages = [page for page, header, *_ in surface.rows if not header]
        assert body_pages.count(1) == rows_per_page(PAGE_HEIGHT, MARGIN, ROW, header_height=ROW)
        assert body_pages.count(4) == 1

    def test_header_once_per_page(self) -> None:
        """Test the header is drawn exactly once on every page, above its rows."""
        surface, _ = _paginate([(f"pod-{i}", "1") for i in range(100)])

        header_pages = [page for page, header, *_ in surface.rows if header]
        assert header_pages == [1, 2, 3, 4]
        for page in header_pages:
            first = next(row for row in surface.rows if row[0] == page)
            assert first[1] is True

    def test_rows_stay_inside_margins(self) -> None:
        """Test no row extends past the bottom margin."""
        surface, _ = _paginate([(f"pod-{i}", "1") for i in range(80)])
        assert all(y + height <= PAGE_HEIGHT - MARGIN for _, _, y, height, _ in surface.rows)

    def test_empty_table_draws_header(self) -> None:
        """Test a table without rows still draws its header."""
        surface, paginator = _paginate([])
        assert [(page, header) for page, header, *_ in surface.rows] == [(1, True)]
        assert paginator.state is RenderState.SECTION_DONE

    def test_header_moves_when_it_cannot_fit(self) -> None:
        """Test a table starting near the bottom breaks before its header."""
        surface, paginator = _paginate([("a", "b")], cursor=_cursor(y=PAGE_HEIGHT - MARGIN - 5))
        assert paginator.page_breaks == 1
        assert surface.rows[0][:3] == (2, True, MARGIN)

    def test_wrapped_row_grows(self) -> None:
        """Test long text wraps and grows the row height."""
        style = TableStyle(min_row_height=ROW, line_height=5.0, cell_padding=1.0)
        surface, _ = _paginate([("x " * 100, "1")], style=style)
        _, _, _, height, lines = surface.rows[1]
        assert len(lines[0]) > 1
        assert height == len(lines[0]) * 5.0

    def test_oversized_row_is_clipped(self) -> None:
        """Test a row taller than a page is clipped instead of looping."""
        tall = "\n".join(["line"] * 100)
        surface, paginator = _paginate([(tall, "1")])
        _, header, y, height, _ = surface.rows[-1]
        assert header is False
        assert y + height == pytest.approx(PAGE_HEIGHT - MARGIN)
        assert paginator.page_breaks == 0

    def test_single_use(self) -> None:
        """Test a paginator cannot render twice."""
        _, paginator = _paginate([("a", "b")])
        with pytest.raises(RuntimeError):
            paginator.render(("A", "B"), [])

    def test_start_height_measures_wrapped_header(self) -> None:
        """Test prepare() reports the wrapped header plus the first row."""
        style = TableStyle(col_widths=(20.0, 20.0), min_row_height=ROW, line_height=5.0)
        paginator = TablePaginator(FakeSurface(), _cursor(), PAGE_HEIGHT - 2 * MARGIN, style)

        needed = paginator.prepare(("NAME", "CPU ALLOCATED"), [("a", "1")])

        assert needed == 10.0 + ROW
        assert paginator.state is RenderState.AWAITING_HEADER

    def test_start_height_requires_prepare(self) -> None:
        """Test start_height is unavailable before the table is wrapped."""
        paginator = TablePaginator(FakeSurface(), _cursor(), PAGE_HEIGHT - 2 * MARGIN)
        with pytest.raises(RuntimeError):
            paginator.start_height
