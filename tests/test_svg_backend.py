from __future__ import annotations

from pathlib import Path

from qc_radial.chart.build import build_scene
from qc_radial.chart.normalize import Observation
from qc_radial.render.svg import SvgContainer, render_svg


def _scene():
    return build_scene(
        [
            Observation("mesh mould", "approved", 1200),
            Observation("mesh mould", "rejected", 100),
            Observation("pre pour", "approved", 400),
        ]
    )


def test_render_svg_document_structure() -> None:
    document = render_svg(_scene())

    assert document.startswith("<svg")
    assert 'viewBox="-300 -300 696 600"' in document
    assert document.count("<path") == 3
    assert "<title>mesh mould approved\n1,200</title>" in document
    for layer in ("arcs", "angular-axis", "radial-axis", "legend"):
        assert f'<g class="{layer}"' in document
    assert ">1.2k</text>" in document
    assert ">Count</text>" in document


def test_render_svg_escapes_labels() -> None:
    document = render_svg(build_scene([Observation("a<b", "x&y", 1)]))

    assert "a&lt;b" in document
    assert "x&amp;y" in document
    assert "a<b" not in document


def test_svg_container_save(tmp_path: Path) -> None:
    container = SvgContainer()
    container.draw(_scene())

    output = container.save(tmp_path / "figures" / "chart.svg")

    assert output.exists()
    assert output.read_text(encoding="utf-8") == container.document
    container.clear()
    assert container.children == []
    assert container.scene is None
