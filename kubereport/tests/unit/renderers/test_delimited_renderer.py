"""Tests for the delimited-text renderer."""

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path

import pytest

from kubereport.exceptions import RenderIOError
from kubereport.models.record_table import RecordTable
from kubereport.renderers.base import artifact_name
from kubereport.renderers.delimited import REPORT_BANNER, DelimitedRenderer

NOW = datetime(2024, 6, 1, 9, 30)


def _read(path: Path) -> list[list[str]]:
    with path.open(encoding="utf-8", newline="") as handle:
        return list(csv.reader(handle))


class TestArtifactName:
    """Tests for artifact naming."""

    def test_name(self) -> None:
        """Test the timestamped artifact name."""
        assert artifact_name("csv", NOW) == "kubernetes_cluster_report_01-06-2024-09-30.csv"


class TestDelimitedRenderer:
    """Tests for DelimitedRenderer class."""

    @pytest.fixture
    def renderer(self, tmp_path: Path) -> DelimitedRenderer:
        """Create a renderer writing into a temporary directory."""
        return DelimitedRenderer(tmp_path / "out", NOW)

    def test_section_layout(self, renderer: DelimitedRenderer) -> None:
        """Test banner, title, header, rows and blank separator records."""
        table = RecordTable(columns=("NAME", "AGE"))
        table.add_row(("web", "1h0m0s"))

        renderer.open()
        renderer.write_title("[ POD DETAILS ]")
        renderer.render_table(table)
        path = renderer.close()

        assert path == renderer.artifact_path
        assert _read(path) == [
            [REPORT_BANNER],
            ["[ POD DETAILS ]"],
            ["NAME", "AGE"],
            ["web", "1h0m0s"],
            [],
        ]
        assert not renderer.partial_path.exists()

    def test_round_trip_special_cells(self, renderer: DelimitedRenderer) -> None:
        """Test cells with delimiters, quotes and newlines read back unchanged."""
        cells = ("a,b", 'say "hi"', "line1\nline2", "plain ☸", "")
        table = RecordTable(columns=("C1", "C2", "C3", "C4", "C5"))
        table.add_row(cells)

        renderer.open()
        renderer.write_title("[ CONFIGMAP DETAILS ]")
        renderer.render_table(table)
        records = _read(renderer.close())

        assert tuple(records[3]) == cells

    def test_empty_table_keeps_title_and_header(self, renderer: DelimitedRenderer) -> None:
        """Test an empty table still writes its title and header."""
        renderer.open()
        renderer.write_title("[ SECRET DETAILS ]")
        renderer.render_table(RecordTable(columns=("SECRET NAME",)))
        assert _read(renderer.close())[1:] == [["[ SECRET DETAILS ]"], ["SECRET NAME"], []]

    def test_abort_removes_partial(self, renderer: DelimitedRenderer) -> None:
        """Test abort discards the partial file and never creates the artifact."""
        renderer.open()
        renderer.write_title("[ POD DETAILS ]")
        assert renderer.partial_path.exists()

        renderer.abort()

        assert not renderer.partial_path.exists()
        assert not renderer.artifact_path.exists()

    def test_write_before_open(self, renderer: DelimitedRenderer) -> None:
        """Test writing without open raises RenderIOError."""
        with pytest.raises(RenderIOError):
            renderer.write_title("[ POD DETAILS ]")

    def test_custom_delimiter(self, tmp_path: Path) -> None:
        """Test a non-default delimiter."""
        renderer = DelimitedRenderer(tmp_path, NOW, delimiter=";")
        table = RecordTable(columns=("A", "B"))
        table.add_row(("1", "2"))
        renderer.open()
        renderer.render_table(table)
        text = renderer.close().read_text(encoding="utf-8")
        assert "A;B" in text
