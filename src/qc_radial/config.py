from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

Theme = Literal["light", "dark"]


class ChartOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    width: float = Field(default=600.0, gt=0)
    height: float = Field(default=600.0, gt=0)
    inner_radius_fraction: float = Field(default=0.4, gt=0.0, lt=1.0)
    category_padding: float = Field(default=0.0, ge=0.0, lt=1.0)
    tick_count: int = Field(default=5, ge=1)
    color_palette: str | list[str] | None = None
    theme: Theme = "light"
    pad_width: float = Field(default=1.5, ge=0.0)
    series_order: list[str] | None = None
    duplicate_policy: Literal["sum", "last"] = "sum"
    axis_title: str = "Count"
    font: str = "9px Lexend, sans-serif"

    @property
    def outer_radius(self) -> float:
        return min(self.width, self.height) / 2.0

    @property
    def inner_radius(self) -> float:
        return self.outer_radius * self.inner_radius_fraction


class DateFilterConfig(BaseModel):
    type: Literal["yearly", "monthly", "weekly"] = "yearly"
    year: int = Field(default=2025, ge=1900, le=9999)
    month: int | None = Field(default=None, ge=1, le=12)
    date: int | None = Field(default=None, ge=1, le=31)

    @model_validator(mode="after")
    def _check_period(self) -> DateFilterConfig:
        if self.type in ("monthly", "weekly") and self.month is None:
            raise ValueError(f"date_filter.month is required for {self.type} filters.")
        return self

    def to_query_params(self) -> str:
        params = f"type={self.type}&year={self.year}"
        if self.month:
            params += f"&month={self.month}"
        if self.type == "weekly" and self.date:
            params += f"&date={self.date}"
        return params


class SourceConfig(BaseModel):
    mode: Literal["file", "http"] = "file"
    base_url: str | None = None
    project_id: str | None = None
    token: str | None = None
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    date_filter: DateFilterConfig = Field(default_factory=DateFilterConfig)


class OutputsConfig(BaseModel):
    figures_format: Literal["svg", "png", "pdf"] = "svg"
    tables_format: Literal["csv", "parquet", "json"] = "csv"
    dpi: int = Field(default=150, ge=36)
    write_report: bool = True


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    chart: ChartOptions = Field(default_factory=ChartOptions)
    source: SourceConfig = Field(default_factory=SourceConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    config.source.base_url = config.source.base_url or os.getenv("QC_RADIAL_API_URL")
    config.source.token = config.source.token or os.getenv("QC_RADIAL_API_TOKEN")
    return config
