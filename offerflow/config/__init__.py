"""Configuration helpers for OfferFlow rendering.

Provides the render settings model (page geometry, fonts, date formats) and a
loader for YAML overrides so page layout can be tuned without code changes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from offerflow.core.errors import ConfigError
from offerflow_io.schema import PageGeometry, Typography


SETTINGS_ENV = "OFFERFLOW_SETTINGS"


class PageSettings(BaseModel):
    """Page geometry in millimetres (A4 portrait by default)."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=210.0, gt=0)
    height: float = Field(default=297.0, gt=0)
    margin: float = Field(default=20.0, ge=0)
    line_height: float = Field(default=6.0, gt=0)
    content_top: float = Field(default=50.0, ge=0)
    max_line_width: float = Field(default=170.0, gt=0)
    header_top: float = Field(default=20.0, ge=0)
    header_spacing: float = Field(default=10.0, ge=0)
    rule_y: float = Field(default=35.0, ge=0)
    footer_offset: float = Field(default=10.0, ge=0)

    @model_validator(mode="after")
    def _room_for_content(self) -> "PageSettings":
        bottom = self.height - self.margin
        if self.content_top + self.line_height > bottom:
            raise ValueError("content_top leaves no room for a line on the first page")
        if self.margin + self.line_height > bottom:
            raise ValueError("margins leave no room for a line on continuation pages")
        if self.max_line_width > self.width:
            raise ValueError("max_line_width exceeds page width")
        return self


class FontSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = "Helvetica"
    header_size: float = Field(default=12.0, gt=0)
    body_size: float = Field(default=11.0, gt=0)
    footer_size: float = Field(default=8.0, gt=0)


class RenderSettings(BaseModel):
    """Everything the renderer needs besides the template, record and mapping."""

    model_config = ConfigDict(extra="forbid")

    page: PageSettings = Field(default_factory=PageSettings)
    fonts: FontSettings = Field(default_factory=FontSettings)
    # Short date forms of the active LC_TIME locale; the CLI adopts the user's locale.
    date_format: str = "%x"
    timestamp_format: str = "%x %X"
    output_extension: str = "pdf"

    def geometry(self) -> PageGeometry:
        return PageGeometry(**self.page.model_dump())

    def typography(self) -> Typography:
        return Typography(
            font_name=self.fonts.name,
            header_size=self.fonts.header_size,
            body_size=self.fonts.body_size,
            footer_size=self.fonts.footer_size,
        )


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid settings YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Settings file must contain a mapping")
    return data


def load_settings(path: str | Path | None = None) -> RenderSettings:
    """Load render settings from ``path`` (or ``$OFFERFLOW_SETTINGS``), else defaults."""

    source = path or os.getenv(SETTINGS_ENV)
    if not source:
        return RenderSettings()
    data = _load_yaml(Path(source))
    try:
        return RenderSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {source}: {exc}") from exc


__all__ = [
    "FontSettings",
    "PageSettings",
    "RenderSettings",
    "SETTINGS_ENV",
    "load_settings",
]
