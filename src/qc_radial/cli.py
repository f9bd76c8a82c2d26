from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer

from qc_radial.chart.build import format_value, layout_observations
from qc_radial.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from qc_radial.io.read import load_observations
from qc_radial.logging import configure_logging
from qc_radial.pipeline.run_chart import run_chart

app = typer.Typer(no_args_is_help=True, add_completion=False)


class FigureFormat(str, Enum):
    svg = "svg"
    png = "png"
    pdf = "pdf"


class ThemeName(str, Enum):
    light = "light"
    dark = "dark"


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _require_input_for_file_mode(input_path: Path | None, cfg: AppConfig) -> Path | None:
    if cfg.source.mode == "file" and input_path is None:
        raise typer.BadParameter(
            "Missing --input. Required when source.mode='file'. "
            "Set source.mode='http' and configure source.base_url/source.project_id "
            "to fetch observations from the QC report API."
        )
    return input_path


def _apply_overrides(
    cfg: AppConfig,
    figures_format: FigureFormat | None,
    theme: ThemeName | None,
) -> None:
    if figures_format is not None:
        cfg.outputs.figures_format = figures_format.value
    if theme is not None:
        # ChartOptions is frozen.
        cfg.chart = cfg.chart.model_copy(update={"theme": theme.value})


@app.command("render")
def render_command(
    input_path: Path | None = typer.Option(
        None,
        "--input",
        exists=True,
        readable=True,
        resolve_path=True,
        help="CSV, Parquet or JSON table of stage/status/count observations.",
    ),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    figures_format: FigureFormat | None = typer.Option(
        None,
        "--format",
        help="Override outputs.figures_format.",
    ),
    theme: ThemeName | None = typer.Option(None, help="Override chart.theme."),
    log_level: str = typer.Option("INFO", help="Logging level."),
) -> None:
    """Render the radial stacked QC chart, its tables and the HTML report."""
    configure_logging(log_level)
    cfg = _load_app_config(config)
    _apply_overrides(cfg, figures_format, theme)
    input_path = _require_input_for_file_mode(input_path=input_path, cfg=cfg)
    result = run_chart(cfg, out, input_path=input_path)
    typer.echo(f"Chart ({result.status}) written to: {result.figure_path}")
    if result.report_path is not None:
        typer.echo(f"Report written to: {result.report_path}")


@app.command()
def summary(
    input_path: Path = typer.Option(..., "--input", exists=True, readable=True, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Print per-stage stack totals for an observation file."""
    configure_logging("WARNING")
    cfg = _load_app_config(config)
    layout = layout_observations(load_observations(input_path), cfg.chart)
    if not layout.segments:
        typer.echo("No qc data available.")
        return
    for category in layout.categories:
        parts = ", ".join(
            f"{segment.series}={format_value(segment.value)}"
            for segment in layout.segments_for(category)
        )
        typer.echo(f"{category}: {format_value(layout.totals[category])} ({parts})")


if __name__ == "__main__":
    app()
