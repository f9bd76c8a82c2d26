from __future__ import annotations

import re
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib import patheffects
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import Polygon, Rectangle

from qc_radial.chart.scene import Circle, Line, Primitive, Rect, Scene, Sector, Text
from qc_radial.render.base import ChartContainer

UNITS_PER_INCH = 100.0
DEFAULT_FONT_PX = 9.0
HORIZONTAL_ALIGNMENT = {"start": "left", "middle": "center", "end": "right"}


def font_size_points(font: str) -> float:
    match = re.search(r"(\d+(?:\.\d+)?)px", font)
    pixels = float(match.group(1)) if match else DEFAULT_FONT_PX
    return pixels * 72.0 / UNITS_PER_INCH


def _vertical_alignment(dy: float) -> str:
    if dy < 0:
        return "bottom"
    if dy > 0.2:
        return "center"
    return "baseline"


def _draw_element(axes: Axes, element: Primitive, font_size: float) -> None:
    if isinstance(element, Sector):
        patch = Polygon(
            element.geometry.outline(),
            closed=True,
            facecolor=element.fill,
            edgecolor="none",
        )
        patch.set_gid(f"{element.category}/{element.series}")
        axes.add_patch(patch)
    elif isinstance(element, Line):
        axes.plot(
            [element.x1, element.x2],
            [element.y1, element.y2],
            color=element.stroke,
            alpha=element.opacity,
            linewidth=1.0,
        )
    elif isinstance(element, Circle):
        axes.add_patch(
            CirclePatch(
                (element.cx, element.cy),
                element.r,
                fill=False,
                edgecolor=element.stroke,
                alpha=element.stroke_opacity,
            )
        )
    elif isinstance(element, Rect):
        axes.add_patch(
            Rectangle((element.x, element.y), element.width, element.height, facecolor=element.fill)
        )
    elif isinstance(element, Text):
        halo = element.fill == "none" and element.stroke is not None
        effects = (
            [patheffects.withStroke(linewidth=element.stroke_width, foreground=element.stroke)]
            if halo
            else []
        )
        axes.text(
            element.x,
            element.y,
            element.text,
            # Scene rotations are clockwise on screen; matplotlib's are counter-clockwise.
            rotation=-element.rotation,
            rotation_mode="anchor",
            ha=HORIZONTAL_ALIGNMENT[element.anchor],
            va=_vertical_alignment(element.dy),
            color=element.stroke if halo else element.fill,
            fontsize=font_size,
            fontweight=element.font_weight or "normal",
            path_effects=effects,
        )
    else:
        raise TypeError(f"Unsupported scene element: {type(element).__name__}.")


class FigureContainer(ChartContainer):
    """matplotlib host for raster and PDF output."""

    def __init__(self, dpi: int = 150) -> None:
        self.dpi = dpi
        self.figure: Figure | None = None
        self.axes: Axes | None = None

    def clear(self) -> None:
        if self.figure is not None:
            plt.close(self.figure)
        self.figure = None
        self.axes = None

    def draw(self, scene: Scene) -> None:
        self.clear()
        figure = plt.figure(
            figsize=(scene.width / UNITS_PER_INCH, scene.height / UNITS_PER_INCH),
            dpi=self.dpi,
        )
        axes = figure.add_axes((0.0, 0.0, 1.0, 1.0))
        x, y, width, height = scene.view_box
        axes.set_xlim(x, x + width)
        # Scene coordinates grow downwards.
        axes.set_ylim(y + height, y)
        axes.set_aspect("equal")
        axes.axis("off")

        font_size = font_size_points(scene.font)
        for layer in scene.layers:
            for element in layer.elements:
                _draw_element(axes, element, font_size)
        self.figure = figure
        self.axes = axes

    def save(self, path: Path) -> Path:
        if self.figure is None:
            raise ValueError("Nothing has been drawn into this container.")
        path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(path, dpi=self.dpi)
        return path
