from __future__ import annotations

import math

import pytest

from qc_radial.chart.colors import build_color_scale, theme_colors
from qc_radial.chart.decorations import (
    FLIPPED_LABEL_INSET,
    LABEL_INSET,
    angular_axis,
    is_label_flipped,
    label_rotation,
    legend,
    legend_extent,
    radial_axis,
)
from qc_radial.chart.scales import band_scale, radial_scale
from qc_radial.chart.scene import Circle, Line, Rect, Text

LIGHT = theme_colors("light")


@pytest.mark.parametrize(
    ("mid_angle", "flipped", "rotation"),
    [
        (math.pi / 4, False, 45.0),
        (3 * math.pi / 4, True, -45.0),
        (5 * math.pi / 4, True, 45.0),
        (7 * math.pi / 4, False, 315.0),
    ],
)
def test_label_flip_rule(mid_angle: float, flipped: bool, rotation: float) -> None:
    assert is_label_flipped(mid_angle) is flipped
    assert label_rotation(mid_angle) == pytest.approx(rotation)


def test_angular_axis_places_tick_and_label_per_category() -> None:
    angular = band_scale(["a", "b", "c", "d"])
    layer = angular_axis(angular, 120, LIGHT)

    lines = [element for element in layer.elements if isinstance(element, Line)]
    labels = [element for element in layer.elements if isinstance(element, Text)]
    assert layer.name == "angular-axis"
    assert len(lines) == 4
    assert [label.text for label in labels] == ["a", "b", "c", "d"]

    upright, flipped = labels[0], labels[1]
    assert math.hypot(upright.x, upright.y) == pytest.approx(120 - LABEL_INSET)
    assert math.hypot(flipped.x, flipped.y) == pytest.approx(120 - FLIPPED_LABEL_INSET)
    assert flipped.rotation == pytest.approx(-45.0)


def test_radial_axis_draws_title_and_rings_for_non_zero_ticks() -> None:
    radial = radial_scale(1300, 120, 300)
    layer = radial_axis(radial, LIGHT, tick_count=5, title="Count")

    title = layer.elements[0]
    assert isinstance(title, Text)
    assert title.text == "Count"
    assert title.y == pytest.approx(-radial(1200))

    rings = [element for element in layer.elements if isinstance(element, Circle)]
    assert [ring.r for ring in rings] == pytest.approx([radial(v) for v in range(200, 1400, 200)])

    labels = [element for element in layer.elements[1:] if isinstance(element, Text)]
    halos = [label for label in labels if label.fill == "none"]
    assert [halo.text for halo in halos] == ["0.2k", "0.4k", "0.6k", "0.8k", "1.0k", "1.2k"]
    assert all(halo.stroke == "white" for halo in halos)


def test_radial_axis_for_zero_max_has_only_title() -> None:
    layer = radial_axis(radial_scale(0, 120, 300), LIGHT)

    assert len(layer.elements) == 1
    assert layer.elements[0].y == pytest.approx(-120)  # type: ignore[union-attr]


def test_legend_stacks_swatches_upwards() -> None:
    color_scale = build_color_scale(["approved", "rejected"])
    layer = legend(color_scale, 324, LIGHT)

    swatches = [element for element in layer.elements if isinstance(element, Rect)]
    assert [swatch.y for swatch in swatches] == [0.0, -20.0]
    assert [swatch.fill for swatch in swatches] == ["#66c2a5", "#fc8d62"]
    assert all(swatch.x == 324 for swatch in swatches)
    assert legend_extent(["approved", "rejected"]) == 96.0
    assert legend_extent([]) == 0.0
