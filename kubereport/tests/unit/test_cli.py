"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from kubereport import __version__
from kubereport.cli import app

runner = CliRunner()

SNAPSHOT = """\
cluster_name: lab
resources:
  nodes:
    - metadata: {name: node-a}
      status:
        allocatable: {cpu: "2", memory: 4Gi}
        conditions: [{type: Ready, status: "True"}]
  namespaces:
    - metadata: {name: default}
"""


class TestCli:
    """Tests for the kubereport commands."""

    def test_version(self) -> None:
        """Test the version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_generate_from_snapshot(self, tmp_path: Path) -> None:
        """Test generating a detailed report from a snapshot file."""
        snapshot = tmp_path / "cluster.yaml"
        snapshot.write_text(SNAPSHOT, encoding="utf-8")
        output_dir = tmp_path / "reports"

        result = runner.invoke(
            app,
            [
                "generate",
                "--report",
                "detailed",
                "--snapshot",
                str(snapshot),
                "--output-dir",
                str(output_dir),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "cluster: lab" in result.stdout
        assert len(list(output_dir.glob("kubernetes_cluster_report_*.csv"))) == 1

    def test_bad_snapshot_exits_1(self, tmp_path: Path) -> None:
        """Test errors exit with code 1."""
        result = runner.invoke(
            app, ["generate", "--snapshot", str(tmp_path / "missing.yaml")]
        )
        assert result.exit_code == 1

    def test_config_file(self, tmp_path: Path) -> None:
        """Test settings come from --config with CLI overrides on top."""
        snapshot = tmp_path / "cluster.yaml"
        snapshot.write_text(SNAPSHOT, encoding="utf-8")
        config = tmp_path / "kubereport.yaml"
        config.write_text(
            f"report_type: general\nsnapshot_path: {snapshot}\noutput_dir: {tmp_path / 'pdf'}\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["generate", "--config", str(config), "--report", "detailed"])

        assert result.exit_code == 0, result.output
        assert list((tmp_path / "pdf").glob("*.csv"))
