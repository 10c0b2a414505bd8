"""Command line interface for generating cluster reports."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from kubereport import __version__
from kubereport.constants.enums import ReportType
from kubereport.exceptions import ConfigLoadError, KubeReportError
from kubereport.models.settings import ReportSettings, load_settings
from kubereport.report.generator import generate_report

app = typer.Typer(add_completion=False, help="kubereport: Kubernetes cluster inventory reports")
console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


def _build_settings(
    config: Path | None, **overrides: object
) -> ReportSettings:
    if config is not None:
        return load_settings(config, **overrides)
    try:
        return ReportSettings.model_validate(
            {key: value for key, value in overrides.items() if value is not None}
        )
    except ValidationError as exc:
        raise ConfigLoadError(f"invalid options: {exc}") from exc


@app.command("generate")
def generate(
    report: ReportType | None = typer.Option(
        None, "--report", "-r", help="Report type: general (PDF) or detailed (CSV)."
    ),
    kubeconfig: str | None = typer.Option(None, "--kubeconfig", help="Path to a kubeconfig file."),
    context: str | None = typer.Option(None, "--context", help="Kubeconfig context to use."),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Directory for the report artifact."
    ),
    snapshot: Path | None = typer.Option(
        None, "--snapshot", help="Read cluster objects from a YAML/JSON snapshot file."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML settings file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """
    Generate a report for the current cluster
    """
    _configure_logging(verbose)
    try:
        settings = _build_settings(
            config,
            report_type=report,
            kubeconfig=kubeconfig,
            context=context,
            output_dir=output_dir,
            snapshot_path=snapshot,
        )
        result = asyncio.run(generate_report(settings))
    except KubeReportError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    typer.echo(f"cluster: {result.cluster_name}")
    typer.echo(f"report: {result.artifact_path}")


@app.command("version")
def version() -> None:
    """
    Print the kubereport version
    """
    typer.echo(__version__)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
