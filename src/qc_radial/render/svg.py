from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from qc_radial.chart.arcs import format_coordinate
from qc_radial.chart.scene import Circle, Layer, Line, Primitive, Rect, Scene, Sector, Text
from qc_radial.render.base import ChartContainer


@dataclass(frozen=True)
class SvgNode:
    tag: str
    attrs: tuple[tuple[str, str], ...]
    text: str = ""
    title: str = ""


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("svg", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _text_attrs(text: Text) -> list[tuple[str, str]]:
    x, y = format_coordinate(text.x), format_coordinate(text.y)
    attrs = [("x", x), ("y", y)]
    if text.rotation:
        attrs.append(("transform", f"rotate({format_coordinate(text.rotation)} {x} {y})"))
    if text.anchor != "middle":
        attrs.append(("text-anchor", text.anchor))
    if text.dy:
        attrs.append(("dy", f"{format_coordinate(text.dy)}em"))
    if text.font_weight is not None:
        attrs.append(("font-weight", str(text.font_weight)))
    attrs.append(("fill", text.fill))
    if text.stroke is not None:
        attrs.append(("stroke", text.stroke))
        attrs.append(("stroke-width", format_coordinate(text.stroke_width)))
    return attrs


def svg_node(element: Primitive) -> SvgNode:
    if isinstance(element, Sector):
        return SvgNode(
            tag="path",
            attrs=(("d", element.geometry.path()), ("fill", element.fill)),
            title=element.title,
        )
    if isinstance(element, Line):
        return SvgNode(
            tag="line",
            attrs=(
                ("x1", format_coordinate(element.x1)),
                ("y1", format_coordinate(element.y1)),
                ("x2", format_coordinate(element.x2)),
                ("y2", format_coordinate(element.y2)),
                ("stroke", element.stroke),
                ("opacity", format_coordinate(element.opacity)),
            ),
        )
    if isinstance(element, Circle):
        return SvgNode(
            tag="circle",
            attrs=(
                ("cx", format_coordinate(element.cx)),
                ("cy", format_coordinate(element.cy)),
                ("r", format_coordinate(element.r)),
                ("fill", element.fill),
                ("stroke", element.stroke),
                ("stroke-opacity", format_coordinate(element.stroke_opacity)),
            ),
        )
    if isinstance(element, Rect):
        return SvgNode(
            tag="rect",
            attrs=(
                ("x", format_coordinate(element.x)),
                ("y", format_coordinate(element.y)),
                ("width", format_coordinate(element.width)),
                ("height", format_coordinate(element.height)),
                ("fill", element.fill),
            ),
        )
    if isinstance(element, Text):
        return SvgNode(tag="text", attrs=tuple(_text_attrs(element)), text=element.text)
    raise TypeError(f"Unsupported scene element: {type(element).__name__}.")


def _layer_context(layer: Layer) -> dict[str, object]:
    return {"name": layer.name, "nodes": [svg_node(element) for element in layer.elements]}


def render_svg(scene: Scene) -> str:
    """Serialize a scene into a standalone SVG document."""
    template = _template_env().get_template("chart.svg.j2")
    return template.render(
        width=format_coordinate(scene.width),
        height=format_coordinate(scene.height),
        view_box=" ".join(format_coordinate(value) for value in scene.view_box),
        font=scene.font,
        foreground=scene.foreground,
        layers=[_layer_context(layer) for layer in scene.layers],
    )


class SvgContainer(ChartContainer):
    """In-memory SVG host; each draw call appends one ``<svg>`` document."""

    def __init__(self) -> None:
        self.children: list[str] = []
        self.scene: Scene | None = None

    def clear(self) -> None:
        self.children.clear()
        self.scene = None

    def draw(self, scene: Scene) -> None:
        self.scene = scene
        self.children.append(render_svg(scene))

    @property
    def document(self) -> str:
        return "\n".join(self.children)

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.document, encoding="utf-8")
        return path
