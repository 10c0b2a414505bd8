"""Data models for KubeReport."""

from kubereport.models.quantity import (
    Quantity,
    aggregate,
    parse_quantity,
    percentage,
    scale_to,
)
from kubereport.models.record_table import RecordTable
from kubereport.models.settings import PageSettings, ReportSettings, load_settings

__all__ = [
    "PageSettings",
    "Quantity",
    "RecordTable",
    "ReportSettings",
    "aggregate",
    "load_settings",
    "parse_quantity",
    "percentage",
    "scale_to",
]
