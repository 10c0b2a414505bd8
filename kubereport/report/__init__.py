"""Report assembly: section catalogues, orchestration and the entry point."""

from kubereport.report.generator import ReportResult, generate_report
from kubereport.report.orchestrator import ReportOrchestrator
from kubereport.report.sections import DETAILED_SECTIONS, GENERAL_SECTIONS, Section

__all__ = [
    "DETAILED_SECTIONS",
    "GENERAL_SECTIONS",
    "ReportOrchestrator",
    "ReportResult",
    "Section",
    "generate_report",
]
