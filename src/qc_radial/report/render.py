from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from qc_radial.chart.build import format_value
from qc_radial.chart.stack import StackLayout

ChartStatus = Literal["ok", "empty", "error"]

STATUS_MESSAGES: dict[str, str] = {
    "ok": "",
    "empty": "No qc data available.",
    "error": "Failed to load QC chart.",
}


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def chart_status(layout: StackLayout, error: str | None = None) -> ChartStatus:
    if error:
        return "error"
    if not layout.segments:
        return "empty"
    return "ok"


def stage_totals_rows(layout: StackLayout) -> list[dict[str, Any]]:
    """One row per category with each series' value in stacking order and the stack total."""
    values: dict[tuple[str, str], float] = {
        (segment.category, segment.series): segment.value for segment in layout.segments
    }
    rows: list[dict[str, Any]] = []
    for category in layout.categories:
        rows.append(
            {
                "category": category,
                "values": [format_value(values.get((category, key), 0.0)) for key in layout.series],
                "total": format_value(layout.totals.get(category, 0.0)),
            }
        )
    return rows


def render_report(
    svg_document: str,
    layout: StackLayout,
    out_dir: Path,
    *,
    error: str | None = None,
    title: str = "QC stagewise status",
) -> Path:
    status = chart_status(layout, error)
    template = _template_env().get_template("report.html.j2")
    rendered = template.render(
        title=title,
        generated_at=datetime.now(timezone.utc).isoformat(),
        status=status,
        status_message=STATUS_MESSAGES[status],
        error=error,
        chart_svg=Markup(svg_document),
        series=list(layout.series),
        rows=stage_totals_rows(layout),
    )
    report_path = out_dir / "report.html"
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(rendered, encoding="utf-8")
    return report_path
