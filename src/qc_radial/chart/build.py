from __future__ import annotations

import logging
import math

from qc_radial.chart.arcs import segment_sector
from qc_radial.chart.colors import build_color_scale, theme_colors
from qc_radial.chart.decorations import (
    LEGEND_GAP,
    angular_axis,
    legend,
    legend_extent,
    radial_axis,
)
from qc_radial.chart.normalize import ObservationInput, normalize_observations
from qc_radial.chart.scales import band_scale, radial_scale
from qc_radial.chart.scene import Layer, Scene, Sector
from qc_radial.chart.stack import StackLayout, build_stack
from qc_radial.config import ChartOptions
from qc_radial.render.base import ChartContainer

LOGGER = logging.getLogger(__name__)


def format_value(value: float) -> str:
    """Thousands separators and at most three fraction digits, as en-US locales print numbers."""
    number = float(value)
    if not math.isfinite(number):
        return str(number)
    text = f"{number:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_tooltip(category: str, series: str, value: float) -> str:
    return f"{category} {series}\n{format_value(value)}"


def layout_observations(
    observations: ObservationInput,
    options: ChartOptions | None = None,
) -> StackLayout:
    options = options or ChartOptions()
    normalized = normalize_observations(observations, duplicate_policy=options.duplicate_policy)
    return build_stack(normalized, series_order=options.series_order)


def scene_from_layout(layout: StackLayout, options: ChartOptions | None = None) -> Scene:
    options = options or ChartOptions()
    inner_radius = options.inner_radius
    outer_radius = options.outer_radius
    colors = theme_colors(options.theme)

    angular = band_scale(layout.categories, options.category_padding)
    radial = radial_scale(layout.max_total, inner_radius, outer_radius)
    color_scale = build_color_scale(
        layout.series, palette=options.color_palette, theme=options.theme
    )
    pad_angle = options.pad_width / inner_radius

    sectors = tuple(
        Sector(
            category=segment.category,
            series=segment.series,
            value=segment.value,
            geometry=segment_sector(
                segment, angular, radial, pad_angle=pad_angle, pad_radius=inner_radius
            ),
            fill=color_scale(segment.series),
            title=format_tooltip(segment.category, segment.series, segment.value),
        )
        for segment in layout.segments
    )

    extra_width = legend_extent(layout.series)
    width = options.width + extra_width
    return Scene(
        width=width,
        height=options.height,
        view_box=(-options.width / 2.0, -options.height / 2.0, width, options.height),
        font=options.font,
        foreground=colors.foreground,
        layers=(
            Layer(name="arcs", elements=sectors),
            angular_axis(angular, inner_radius, colors),
            radial_axis(radial, colors, tick_count=options.tick_count, title=options.axis_title),
            legend(color_scale, outer_radius + LEGEND_GAP, colors),
        ),
    )


def build_scene(observations: ObservationInput, options: ChartOptions | None = None) -> Scene:
    """Run the whole chart pipeline and return an immutable scene description."""
    layout = layout_observations(observations, options)
    LOGGER.debug(
        "Stacked %d segment(s) over %d categories, max total %s",
        len(layout.segments),
        len(layout.categories),
        layout.max_total,
    )
    return scene_from_layout(layout, options)


def render(
    container: ChartContainer,
    observations: ObservationInput,
    options: ChartOptions | None = None,
) -> None:
    """Replace whatever ``container`` shows with a chart of ``observations``."""
    scene = build_scene(observations if observations is not None else [], options)
    container.clear()
    container.draw(scene)
