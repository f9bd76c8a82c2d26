from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from qc_radial.config import AppConfig, ChartOptions, DateFilterConfig, load_config

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_default_config_file_matches_model_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("QC_RADIAL_API_URL", raising=False)
    monkeypatch.delenv("QC_RADIAL_API_TOKEN", raising=False)

    cfg = load_config(REPO_ROOT / "configs" / "default.yaml")

    assert cfg.chart == ChartOptions()
    assert cfg.source.mode == "file"
    assert cfg.outputs.figures_format == "svg"
    assert cfg.outputs.tables_format == "csv"


def test_load_config_uses_env_for_endpoint(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump({"source": {"mode": "http", "project_id": "7"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("QC_RADIAL_API_URL", "https://qc.example.test")
    monkeypatch.setenv("QC_RADIAL_API_TOKEN", "env-token")

    cfg = load_config(config_path)

    assert cfg.source.base_url == "https://qc.example.test"
    assert cfg.source.token == "env-token"


def test_load_config_prefers_explicit_endpoint(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump({"source": {"base_url": "https://configured.test"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("QC_RADIAL_API_URL", "https://env.test")

    assert load_config(config_path).source.base_url == "https://configured.test"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path).chart.width == 600


def test_unknown_sections_are_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig.model_validate({"charts": {}})
    with pytest.raises(ValidationError):
        ChartOptions(colour="red")  # type: ignore[call-arg]


@pytest.mark.parametrize(
    "options",
    [
        {"inner_radius_fraction": 1.0},
        {"inner_radius_fraction": 0.0},
        {"category_padding": 1.0},
        {"width": 0},
        {"theme": "sepia"},
        {"duplicate_policy": "mean"},
    ],
)
def test_invalid_chart_options_raise(options: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        ChartOptions.model_validate(options)


def test_chart_options_derive_radii() -> None:
    options = ChartOptions(width=800, height=600)

    assert options.outer_radius == 300
    assert options.inner_radius == pytest.approx(120)


def test_date_filter_query_params() -> None:
    assert DateFilterConfig().to_query_params() == "type=yearly&year=2025"
    assert (
        DateFilterConfig(type="weekly", year=2024, month=2, date=12).to_query_params()
        == "type=weekly&year=2024&month=2&date=12"
    )
    assert (
        DateFilterConfig(type="monthly", year=2024, month=2, date=12).to_query_params()
        == "type=monthly&year=2024&month=2"
    )


def test_date_filter_requires_month_for_sub_year_periods() -> None:
    with pytest.raises(ValidationError, match="month is required"):
        DateFilterConfig(type="monthly", year=2024)
