"""Top-level report entry point."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from kubereport.collectors.base import CollectContext
from kubereport.constants.enums import ReportType
from kubereport.exceptions import DataSourceUnavailable, ReportInProgressError
from kubereport.models.settings import ReportSettings
from kubereport.renderers.base import FileRenderer
from kubereport.renderers.delimited import DelimitedRenderer
from kubereport.renderers.pdf import PaginatedRenderer
from kubereport.report.orchestrator import ReportOrchestrator
from kubereport.report.sections import sections_for
from kubereport.sources.base import DataSource
from kubereport.sources.kubectl import KubectlDataSource
from kubereport.sources.snapshot import SnapshotDataSource

# One report at a time per process.
_run_lock = threading.Lock()


@dataclass(frozen=True)
class ReportResult:
    cluster_name: str
    artifact_path: Path


def build_source(settings: ReportSettings) -> DataSource:
    """Snapshot file when configured, otherwise the live cluster through kubectl."""
    if settings.snapshot_path is not None:
        return SnapshotDataSource.from_file(settings.snapshot_path)
    return KubectlDataSource(
        context=settings.context,
        kubeconfig=settings.kubeconfig,
        request_timeout=settings.request_timeout,
    )


def build_renderer(settings: ReportSettings, now: datetime) -> FileRenderer:
    if settings.report_type is ReportType.DETAILED:
        return DelimitedRenderer(settings.output_dir, now)
    return PaginatedRenderer(settings.output_dir, now, settings.page)


async def _generate(
    settings: ReportSettings,
    source: DataSource,
    now: datetime,
    run_logger: logging.Logger,
) -> ReportResult:
    if not await source.check_connection():
        detail = getattr(source, "last_error", None) or "connection check failed"
        raise DataSourceUnavailable(f"cannot reach the cluster: {detail}")

    cluster_name = await source.cluster_name()
    run_logger.info(
        "Generating %s report for cluster %s", settings.report_type.value, cluster_name
    )

    orchestrator = ReportOrchestrator(
        sections_for(settings.report_type),
        build_renderer(settings, now),
        logger=run_logger,
    )
    artifact_path = await orchestrator.run(source, CollectContext(now=now))
    return ReportResult(cluster_name=cluster_name, artifact_path=artifact_path)


async def generate_report(
    settings: ReportSettings,
    source: DataSource | None = None,
    *,
    now: datetime | None = None,
    logger: logging.Logger | None = None,
) -> ReportResult:
    """Generate one report artifact.

    Args:
        settings: Report type, output directory and cluster access settings.
        source: Data source override; built from settings when None.
        now: Reference time for ages and the artifact name (defaults to now).
        logger: Logger for run progress (defaults to this module's logger).

    Raises:
        ReportInProgressError: Another report is being generated in this process.
        DataSourceUnavailable: The connection check failed.
        SectionFailedError: A section could not be collected or rendered.
    """
    if not _run_lock.acquire(blocking=False):
        raise ReportInProgressError("a report is already being generated")
    try:
        run_now = now or datetime.now(timezone.utc).astimezone()
        run_logger = logger or logging.getLogger(__name__)
        return await _generate(
            settings, source or build_source(settings), run_now, run_logger
        )
    finally:
        _run_lock.release()
