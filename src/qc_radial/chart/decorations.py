from __future__ import annotations

import math
from collections.abc import Sequence

from qc_radial.chart.arcs import polar_to_cartesian
from qc_radial.chart.colors import ColorScale, ThemeColors
from qc_radial.chart.scales import TAU, AngularScale, RadialScale
from qc_radial.chart.scene import Circle, Layer, Line, Primitive, Rect, Text

TICK_LENGTH = 5.0
LABEL_INSET = 16.0
FLIPPED_LABEL_INSET = 9.0
TICK_OPACITY = 0.7

GRID_OPACITY = 0.25
HALO_WIDTH = 5.0
LABEL_DY = 0.35
TITLE_DY = -1.0
TITLE_WEIGHT = 600

LEGEND_SWATCH = 18.0
LEGEND_ROW_HEIGHT = 20.0
LEGEND_GAP = 24.0
LEGEND_LABEL_OFFSET = 24.0
LEGEND_CHAR_WIDTH = 6.0


def is_label_flipped(mid_angle: float) -> bool:
    """Labels on the lower half of the circle are turned 180 degrees to stay upright."""
    return (mid_angle + math.pi / 2.0) % TAU >= math.pi


def label_rotation(mid_angle: float) -> float:
    degrees = math.degrees(mid_angle)
    return degrees - 180.0 if is_label_flipped(mid_angle) else degrees


def angular_axis(angular: AngularScale, inner_radius: float, colors: ThemeColors) -> Layer:
    elements: list[Primitive] = []
    for category in angular.domain:
        mid = angular.midpoint(category)
        x1, y1 = polar_to_cartesian(inner_radius, mid)
        x2, y2 = polar_to_cartesian(inner_radius - TICK_LENGTH, mid)
        elements.append(Line(x1=x1, y1=y1, x2=x2, y2=y2, stroke=colors.foreground, opacity=TICK_OPACITY))

        inset = FLIPPED_LABEL_INSET if is_label_flipped(mid) else LABEL_INSET
        x, y = polar_to_cartesian(inner_radius - inset, mid)
        elements.append(
            Text(x=x, y=y, text=category, fill=colors.foreground, rotation=label_rotation(mid))
        )
    return Layer(name="angular-axis", elements=tuple(elements))


def radial_axis(
    radial: RadialScale,
    colors: ThemeColors,
    *,
    tick_count: int = 5,
    title: str = "Count",
) -> Layer:
    """Axis title above the outermost tick, then one labelled grid ring per non-zero tick."""
    values = radial.ticks(tick_count)
    formatter = radial.tick_format(tick_count)
    top = values[-1] if values else 0.0

    elements: list[Primitive] = [
        Text(
            x=0.0,
            y=-radial(top),
            text=title,
            fill=colors.foreground,
            dy=TITLE_DY,
            font_weight=TITLE_WEIGHT,
        )
    ]
    for value in values[1:]:
        radius = radial(value)
        label = formatter(value)
        elements.append(
            Circle(cx=0.0, cy=0.0, r=radius, stroke=colors.foreground, stroke_opacity=GRID_OPACITY)
        )
        elements.append(
            Text(
                x=0.0,
                y=-radius,
                text=label,
                fill="none",
                dy=LABEL_DY,
                stroke=colors.halo,
                stroke_width=HALO_WIDTH,
            )
        )
        elements.append(Text(x=0.0, y=-radius, text=label, fill=colors.foreground, dy=LABEL_DY))
    return Layer(name="radial-axis", elements=tuple(elements))


def legend_extent(series: Sequence[str]) -> float:
    if not series:
        return 0.0
    longest = max(len(key) for key in series)
    return LEGEND_GAP + LEGEND_LABEL_OFFSET + LEGEND_CHAR_WIDTH * longest


def legend(color_scale: ColorScale, x: float, colors: ThemeColors) -> Layer:
    """Swatches stacked vertically around y=0; the first series sits lowest."""
    count = len(color_scale.domain)
    elements: list[Primitive] = []
    for index, key in enumerate(color_scale.domain):
        y = (count / 2.0 - index - 1) * LEGEND_ROW_HEIGHT
        elements.append(
            Rect(x=x, y=y, width=LEGEND_SWATCH, height=LEGEND_SWATCH, fill=color_scale(key))
        )
        elements.append(
            Text(
                x=x + LEGEND_LABEL_OFFSET,
                y=y + LEGEND_SWATCH / 2.0,
                text=key,
                fill=colors.foreground,
                anchor="start",
                dy=LABEL_DY,
            )
        )
    return Layer(name="legend", elements=tuple(elements))
