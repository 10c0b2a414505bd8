"""Default values for report settings.

All default values used in ReportSettings/PageSettings and cell fallbacks.
"""

from typing import Final

# ============================================================================
# Output defaults
# ============================================================================

REPORT_TYPE_DEFAULT: Final = "general"
OUTPUT_DIR_DEFAULT: Final = "."
ARTIFACT_PREFIX: Final = "kubernetes_cluster_report"
ARTIFACT_TIMESTAMP_FORMAT: Final = "%d-%m-%Y-%H-%M"

# ============================================================================
# Cell sentinels
# ============================================================================

NOT_AVAILABLE: Final = "N/A"
UNKNOWN: Final = "Unknown"
NO_CONDITIONS: Final = "None"

# ============================================================================
# Page layout defaults (millimetres, points for font sizes)
# ============================================================================

PAGE_FORMAT_DEFAULT: Final = "A4"
PAGE_ORIENTATION_DEFAULT: Final = "P"
PAGE_MARGIN_DEFAULT: Final = 10.0
FONT_FAMILY_DEFAULT: Final = "helvetica"
TITLE_FONT_SIZE_DEFAULT: Final = 18
SECTION_FONT_SIZE_DEFAULT: Final = 15
TABLE_FONT_SIZE_DEFAULT: Final = 8
LINE_HEIGHT_DEFAULT: Final = 5.0
ROW_HEIGHT_DEFAULT: Final = 8.0
CELL_PADDING_DEFAULT: Final = 1.0

__all__ = [
    "ARTIFACT_PREFIX",
    "ARTIFACT_TIMESTAMP_FORMAT",
    "CELL_PADDING_DEFAULT",
    "FONT_FAMILY_DEFAULT",
    "LINE_HEIGHT_DEFAULT",
    "NOT_AVAILABLE",
    "NO_CONDITIONS",
    "OUTPUT_DIR_DEFAULT",
    "PAGE_FORMAT_DEFAULT",
    "PAGE_MARGIN_DEFAULT",
    "PAGE_ORIENTATION_DEFAULT",
    "REPORT_TYPE_DEFAULT",
    "ROW_HEIGHT_DEFAULT",
    "SECTION_FONT_SIZE_DEFAULT",
    "TABLE_FONT_SIZE_DEFAULT",
    "TITLE_FONT_SIZE_DEFAULT",
    "UNKNOWN",
]
