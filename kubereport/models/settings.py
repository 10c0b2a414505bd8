"""Report settings models."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kubereport.constants.defaults import (
    CELL_PADDING_DEFAULT,
    FONT_FAMILY_DEFAULT,
    LINE_HEIGHT_DEFAULT,
    OUTPUT_DIR_DEFAULT,
    PAGE_FORMAT_DEFAULT,
    PAGE_MARGIN_DEFAULT,
    PAGE_ORIENTATION_DEFAULT,
    REPORT_TYPE_DEFAULT,
    ROW_HEIGHT_DEFAULT,
    SECTION_FONT_SIZE_DEFAULT,
    TABLE_FONT_SIZE_DEFAULT,
    TITLE_FONT_SIZE_DEFAULT,
)
from kubereport.constants.enums import ReportType
from kubereport.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kubereport.exceptions import ConfigLoadError

logger = logging.getLogger(__name__)


class PageSettings(BaseModel):
    """Page geometry and typography for the paginated document."""

    format: str = PAGE_FORMAT_DEFAULT
    orientation: str = PAGE_ORIENTATION_DEFAULT
    margin: float = Field(default=PAGE_MARGIN_DEFAULT, ge=0)
    font_family: str = FONT_FAMILY_DEFAULT
    title_font_size: int = TITLE_FONT_SIZE_DEFAULT
    section_font_size: int = SECTION_FONT_SIZE_DEFAULT
    table_font_size: int = TABLE_FONT_SIZE_DEFAULT
    line_height: float = Field(default=LINE_HEIGHT_DEFAULT, gt=0)
    row_height: float = Field(default=ROW_HEIGHT_DEFAULT, gt=0)
    cell_padding: float = Field(default=CELL_PADDING_DEFAULT, ge=0)


class ReportSettings(BaseModel):
    """Settings for one report run with validation."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)

    report_type: ReportType = ReportType(REPORT_TYPE_DEFAULT)
    output_dir: Path = Path(OUTPUT_DIR_DEFAULT)

    # Cluster access
    kubeconfig: str | None = None
    context: str | None = None
    request_timeout: str = CLUSTER_REQUEST_TIMEOUT

    # Offline snapshot instead of a live cluster
    snapshot_path: Path | None = None

    page: PageSettings = Field(default_factory=PageSettings)


def load_settings(path: str | Path, **overrides: Any) -> ReportSettings:
    """Load settings from a YAML file, applying keyword overrides on top.

    Overrides whose value is None are ignored so CLI defaults do not mask the file.

    Raises:
        ConfigLoadError: If the file cannot be read, parsed or validated.
    """
    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigLoadError(f"cannot read settings from {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigLoadError(f"settings file {config_path} must contain a mapping")

    raw.update({key: value for key, value in overrides.items() if value is not None})
    try:
        settings = ReportSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigLoadError(f"invalid settings in {config_path}: {exc}") from exc

    logger.debug("Loaded settings from %s", config_path)
    return settings
