from __future__ import annotations

from qc_radial.chart.scene import Scene


class ChartContainer:
    """Drawable surface owned by one render call at a time."""

    def clear(self) -> None:
        raise NotImplementedError

    def draw(self, scene: Scene) -> None:
        raise NotImplementedError
