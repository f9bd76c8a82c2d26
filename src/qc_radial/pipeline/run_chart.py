from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from qc_radial.chart.build import layout_observations, scene_from_layout
from qc_radial.chart.normalize import ObservationInput
from qc_radial.chart.scene import Scene
from qc_radial.chart.stack import StackLayout
from qc_radial.config import AppConfig, OutputsConfig
from qc_radial.io.fetch import ObservationSourceError, fetch_observations
from qc_radial.io.read import load_observations
from qc_radial.io.write import write_summary, write_table
from qc_radial.paths import build_output_paths
from qc_radial.render.mpl import FigureContainer
from qc_radial.render.svg import SvgContainer, render_svg
from qc_radial.report.render import ChartStatus, chart_status, render_report

LOGGER = logging.getLogger(__name__)

FIGURE_STEM = "qc_radial"
TABLE_STEM = "stack_segments"


@dataclass(frozen=True)
class ChartRunResult:
    status: ChartStatus
    layout: StackLayout
    figure_path: Path
    table_path: Path
    summary_path: Path
    report_path: Path | None = None
    error: str | None = None


def collect_observations(
    config: AppConfig,
    input_path: Path | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> tuple[ObservationInput, str | None]:
    """Return ``(observations, error)``; a failed fetch yields no observations and its message."""
    if config.source.mode == "http":
        try:
            return fetch_observations(config.source, transport=transport), None
        except ObservationSourceError as exc:
            LOGGER.exception("Failed to load QC chart observations")
            return [], str(exc)
    if input_path is None:
        raise ValueError("input_path is required when source.mode is 'file'")
    return load_observations(input_path), None


def build_summary(layout: StackLayout, status: ChartStatus, error: str | None = None) -> dict[str, Any]:
    return {
        "status": status,
        "error": error,
        "categories": list(layout.categories),
        "series": list(layout.series),
        "segment_count": len(layout.segments),
        "totals": dict(layout.totals),
        "max_total": layout.max_total,
    }


def write_figure(scene: Scene, outputs: OutputsConfig, path: Path) -> str:
    """Draw an already built scene to ``path`` and return its SVG serialization for the report."""
    if outputs.figures_format == "svg":
        svg_container = SvgContainer()
        svg_container.clear()
        svg_container.draw(scene)
        svg_container.save(path)
        return svg_container.document
    figure_container = FigureContainer(dpi=outputs.dpi)
    figure_container.clear()
    figure_container.draw(scene)
    try:
        figure_container.save(path)
    finally:
        figure_container.clear()
    return render_svg(scene)


def run_chart(
    config: AppConfig,
    out_dir: Path,
    input_path: Path | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> ChartRunResult:
    paths = build_output_paths(out_dir)
    observations, error = collect_observations(config, input_path, transport=transport)

    layout = layout_observations(observations, config.chart)
    scene = scene_from_layout(layout, config.chart)
    status = chart_status(layout, error)
    if status == "empty":
        LOGGER.warning("No QC observations to chart; rendering axes only")

    figure_path = paths.figure(FIGURE_STEM, config.outputs.figures_format)
    chart_svg = write_figure(scene, config.outputs, figure_path)
    LOGGER.info("Wrote QC radial chart to %s", figure_path)

    tables_format = config.outputs.tables_format
    table_path = write_table(
        layout.to_frame(),
        paths.table(TABLE_STEM, tables_format),
        fmt=tables_format,
    )
    summary_path = write_summary(
        build_summary(layout, status, error),
        paths.summary_file(FIGURE_STEM),
    )
    LOGGER.info("Wrote stack table to %s and summary to %s", table_path, summary_path)

    report_path = None
    if config.outputs.write_report:
        report_path = render_report(chart_svg, layout, paths.root, error=error)
        LOGGER.info("Wrote report to %s", report_path)

    return ChartRunResult(
        status=status,
        layout=layout,
        figure_path=figure_path,
        table_path=table_path,
        summary_path=summary_path,
        report_path=report_path,
        error=error,
    )
