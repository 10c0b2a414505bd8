"""Drives the section list through one renderer."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path

from kubereport.collectors.base import CollectContext
from kubereport.exceptions import KubeReportError, SectionFailedError
from kubereport.renderers.base import Renderer
from kubereport.report.sections import Section
from kubereport.sources.base import DataSource


class ReportOrchestrator:
    """Runs each section in order: title, collect, render.

    The first failing section aborts the renderer (discarding the partial
    artifact) and raises SectionFailedError naming that section. Only a run
    where every section succeeds reaches renderer.close().
    """

    def __init__(
        self,
        sections: Sequence[Section],
        renderer: Renderer,
        logger: logging.Logger | None = None,
    ) -> None:
        self.sections = tuple(sections)
        self.renderer = renderer
        self._logger = logger or logging.getLogger(__name__)

    async def _run_section(
        self, section: Section, source: DataSource, context: CollectContext
    ) -> None:
        started = time.monotonic()
        self.renderer.write_title(section.title)
        table = await section.collector.collect(source, context)
        self.renderer.render_table(table, section.style)
        self._logger.info(
            "Section %s: %d rows in %.2fs",
            section.title.strip(),
            len(table),
            time.monotonic() - started,
        )

    async def run(self, source: DataSource, context: CollectContext | None = None) -> Path:
        """Render every section and return the committed artifact path.

        Raises:
            SectionFailedError: The first section that failed, chained from its cause.
            RenderIOError: The artifact could not be opened or committed.
        """
        context = context or CollectContext()
        try:
            self.renderer.open()
            for section in self.sections:
                try:
                    await self._run_section(section, source, context)
                except KubeReportError as exc:
                    self._logger.error("Section %s failed: %s", section.title.strip(), exc)
                    raise SectionFailedError(section.title, exc) from exc
                except Exception as exc:
                    self._logger.exception("Section %s failed", section.title.strip())
                    raise SectionFailedError(section.title, exc) from exc
            return self.renderer.close()
        except BaseException:
            # Any failure, cancellation included, leaves no partial artifact.
            self.renderer.abort()
            raise
