from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from qc_radial.chart.arcs import AnnularSector

TextAnchor = Literal["start", "middle", "end"]


@dataclass(slots=True, frozen=True)
class Sector:
    category: str
    series: str
    value: float
    geometry: AnnularSector
    fill: str
    title: str

    @property
    def key(self) -> tuple[str, str]:
        return self.category, self.series


@dataclass(slots=True, frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    opacity: float = 1.0


@dataclass(slots=True, frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    stroke: str
    stroke_opacity: float = 1.0
    fill: str = "none"


@dataclass(slots=True, frozen=True)
class Text:
    """Text anchored at (x, y), rotated ``rotation`` degrees clockwise about that point.

    ``dy`` is a baseline shift in em units, applied after rotation.
    """

    x: float
    y: float
    text: str
    fill: str
    rotation: float = 0.0
    anchor: TextAnchor = "middle"
    dy: float = 0.0
    stroke: str | None = None
    stroke_width: float = 0.0
    font_weight: int | None = None


@dataclass(slots=True, frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str


Primitive = Union[Sector, Line, Circle, Text, Rect]


@dataclass(slots=True, frozen=True)
class Layer:
    name: str
    elements: tuple[Primitive, ...] = ()


@dataclass(frozen=True)
class Scene:
    width: float
    height: float
    view_box: tuple[float, float, float, float]
    font: str
    foreground: str
    layers: tuple[Layer, ...] = ()

    def layer(self, name: str) -> Layer:
        for layer in self.layers:
            if layer.name == name:
                return layer
        raise KeyError(f"Scene has no layer named {name!r}.")

    def elements(self, kind: type | None = None) -> list[Primitive]:
        found = [element for layer in self.layers for element in layer.elements]
        if kind is None:
            return found
        return [element for element in found if isinstance(element, kind)]

    @property
    def sectors(self) -> list[Sector]:
        return [element for element in self.elements(Sector) if isinstance(element, Sector)]
