from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from qc_radial.chart import ticks as tick_helpers

TAU = 2.0 * math.pi


@dataclass(frozen=True)
class AngularScale:
    """Band scale splitting the full circle into one equal band per category.

    Angles are measured clockwise from twelve o'clock. Each band starts at
    ``index * step`` and is ``step * (1 - padding)`` wide, so the gap sits
    after every band, including the last one before the circle closes.
    """

    domain: tuple[str, ...]
    padding: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.padding < 1.0:
            raise ValueError(f"padding must be in [0, 1), got {self.padding!r}.")
        if len(set(self.domain)) != len(self.domain):
            raise ValueError("angular domain must not contain duplicates.")
        object.__setattr__(self, "_index", {key: i for i, key in enumerate(self.domain)})

    @property
    def step(self) -> float:
        return TAU / max(1, len(self.domain))

    @property
    def bandwidth(self) -> float:
        return self.step * (1.0 - self.padding)

    def angle_of(self, category: str) -> float:
        return self._index[category] * self.step

    def midpoint(self, category: str) -> float:
        return self.angle_of(category) + self.bandwidth / 2.0

    def band(self, category: str) -> tuple[float, float]:
        start = self.angle_of(category)
        return start, start + self.bandwidth

    def __contains__(self, category: object) -> bool:
        return category in self._index


@dataclass(frozen=True)
class RadialScale:
    """Area-preserving map from cumulative value to radius.

    ``r(v) = sqrt(r_in**2 + (r_out**2 - r_in**2) * v / max_value)``, so the
    annulus between two values has an area proportional to their difference.
    A zero ``max_value`` collapses every value onto the inner radius.
    """

    max_value: float
    inner_radius: float
    outer_radius: float

    def __post_init__(self) -> None:
        if self.inner_radius < 0 or self.outer_radius < self.inner_radius:
            raise ValueError("radial range must satisfy 0 <= inner_radius <= outer_radius.")
        if not math.isfinite(self.max_value) or self.max_value < 0:
            raise ValueError(f"max_value must be finite and >= 0, got {self.max_value!r}.")

    def __call__(self, value: float) -> float:
        if self.max_value <= 0:
            return self.inner_radius
        inner_sq = self.inner_radius * self.inner_radius
        outer_sq = self.outer_radius * self.outer_radius
        squared = inner_sq + (outer_sq - inner_sq) * (float(value) / self.max_value)
        return math.sqrt(max(squared, 0.0))

    def ticks(self, count: int = 5) -> list[float]:
        return tick_helpers.ticks(0.0, self.max_value, count)

    def tick_format(self, count: int = 5) -> Callable[[float], str]:
        return tick_helpers.tick_format(0.0, self.max_value, count)


def band_scale(categories: Sequence[str], padding: float = 0.0) -> AngularScale:
    return AngularScale(domain=tuple(categories), padding=padding)


def radial_scale(max_value: float, inner_radius: float, outer_radius: float) -> RadialScale:
    return RadialScale(max_value=float(max_value), inner_radius=inner_radius, outer_radius=outer_radius)
