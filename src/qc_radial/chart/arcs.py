from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from qc_radial.chart.scales import TAU, AngularScale, RadialScale
from qc_radial.chart.stack import StackedSegment

EPSILON = 1e-12


def polar_to_cartesian(radius: float, angle: float) -> tuple[float, float]:
    """Angle 0 points up; angles grow clockwise in screen (y-down) coordinates."""
    return radius * math.sin(angle), -radius * math.cos(angle)


def _asin(value: float) -> float:
    if value >= 1.0:
        return math.pi / 2.0
    if value <= -1.0:
        return -math.pi / 2.0
    return math.asin(value)


def format_coordinate(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(slots=True, frozen=True)
class AnnularSector:
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    inner_start: float
    inner_end: float
    outer_start: float
    outer_end: float

    @property
    def is_full_circle(self) -> bool:
        return abs(self.end_angle - self.start_angle) > TAU - 1e-6

    @property
    def area(self) -> float:
        """Area enclosed by the padded outline (two arcs joined by straight edges)."""
        r0, r1 = self.inner_radius, self.outer_radius
        if self.is_full_circle:
            return math.pi * (r1 * r1 - r0 * r0)
        doubled = (
            r1 * r1 * (self.outer_end - self.outer_start)
            + r1 * r0 * math.sin(self.inner_end - self.outer_end)
            + r0 * r0 * (self.inner_start - self.inner_end)
            + r0 * r1 * math.sin(self.outer_start - self.inner_start)
        )
        return abs(doubled) / 2.0

    @property
    def nominal_area(self) -> float:
        span = abs(self.end_angle - self.start_angle)
        return 0.5 * span * (self.outer_radius**2 - self.inner_radius**2)

    def centroid(self) -> tuple[float, float]:
        radius = (self.inner_radius + self.outer_radius) / 2.0
        return polar_to_cartesian(radius, (self.start_angle + self.end_angle) / 2.0)

    def path(self) -> str:
        """SVG path data for the sector, centred on the origin."""
        r0, r1 = self.inner_radius, self.outer_radius
        if r1 <= EPSILON:
            return "M0,0Z"
        if self.is_full_circle:
            return _full_annulus_path(r0, r1, self.start_angle)

        parts = [_move(*polar_to_cartesian(r1, self.outer_start))]
        outer_span = self.outer_end - self.outer_start
        if abs(outer_span) > EPSILON:
            large = abs(outer_span) >= math.pi
            parts.append(_arc(r1, large, outer_span > 0, *polar_to_cartesian(r1, self.outer_end)))

        parts.append(_line(*polar_to_cartesian(r0, self.inner_end)))
        inner_span = self.inner_end - self.inner_start
        if r0 > EPSILON and abs(inner_span) > EPSILON:
            large = abs(inner_span) >= math.pi
            parts.append(_arc(r0, large, inner_span < 0, *polar_to_cartesian(r0, self.inner_start)))
        parts.append("Z")
        return "".join(parts)

    def outline(self, resolution: int = 64) -> np.ndarray:
        """Closed polygon approximating the sector, shape ``(n, 2)``."""
        count = max(2, int(resolution))
        outer = np.linspace(self.outer_start, self.outer_end, count)
        inner = np.linspace(self.inner_end, self.inner_start, count)
        if self.is_full_circle:
            outer = np.linspace(self.start_angle, self.start_angle + TAU, count)
            inner = np.linspace(self.start_angle + TAU, self.start_angle, count)
        xs = np.concatenate([self.outer_radius * np.sin(outer), self.inner_radius * np.sin(inner)])
        ys = np.concatenate([-self.outer_radius * np.cos(outer), -self.inner_radius * np.cos(inner)])
        return np.column_stack([xs, ys])


def _move(x: float, y: float) -> str:
    return f"M{format_coordinate(x)},{format_coordinate(y)}"


def _line(x: float, y: float) -> str:
    return f"L{format_coordinate(x)},{format_coordinate(y)}"


def _arc(radius: float, large: bool, sweep: bool, x: float, y: float) -> str:
    r = format_coordinate(radius)
    return f"A{r},{r},0,{int(large)},{int(sweep)},{format_coordinate(x)},{format_coordinate(y)}"


def _full_annulus_path(r0: float, r1: float, start: float) -> str:
    parts = [
        _move(*polar_to_cartesian(r1, start)),
        _arc(r1, True, True, *polar_to_cartesian(r1, start + math.pi)),
        _arc(r1, True, True, *polar_to_cartesian(r1, start)),
    ]
    if r0 > EPSILON:
        parts.extend(
            [
                _move(*polar_to_cartesian(r0, start)),
                _arc(r0, True, False, *polar_to_cartesian(r0, start + math.pi)),
                _arc(r0, True, False, *polar_to_cartesian(r0, start)),
            ]
        )
    parts.append("Z")
    return "".join(parts)


def annular_sector(
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    *,
    pad_angle: float = 0.0,
    pad_radius: float | None = None,
) -> AnnularSector:
    """Build a sector, trimming each ring by the pad angle measured at ``pad_radius``.

    The half-gap on a ring of radius ``r`` is ``asin(pad_radius / r * sin(pad_angle / 2))``,
    which keeps the linear gap between neighbouring bands constant across radii.
    A ring whose trimmed span would be empty collapses onto the band midpoint.
    """
    r0, r1 = sorted((float(inner_radius), float(outer_radius)))
    a0, a1 = float(start_angle), float(end_angle)
    span = abs(a1 - a0)
    clockwise = a1 > a0
    a00, a10, a01, a11 = a0, a1, a0, a1

    half_pad = pad_angle / 2.0
    if half_pad > EPSILON and span < TAU - 1e-6:
        radius = pad_radius if pad_radius is not None else math.sqrt(r0 * r0 + r1 * r1)
        if radius > EPSILON:
            direction = 1.0 if clockwise else -1.0
            midpoint = (a0 + a1) / 2.0
            p0 = _asin(radius / r0 * math.sin(half_pad)) if r0 > EPSILON else 0.0
            p1 = _asin(radius / r1 * math.sin(half_pad)) if r1 > EPSILON else 0.0
            if span - 2.0 * p0 > EPSILON:
                a00, a10 = a0 + p0 * direction, a1 - p0 * direction
            else:
                a00 = a10 = midpoint
            if span - 2.0 * p1 > EPSILON:
                a01, a11 = a0 + p1 * direction, a1 - p1 * direction
            else:
                a01 = a11 = midpoint

    return AnnularSector(
        inner_radius=r0,
        outer_radius=r1,
        start_angle=a0,
        end_angle=a1,
        inner_start=a00,
        inner_end=a10,
        outer_start=a01,
        outer_end=a11,
    )


def segment_sector(
    segment: StackedSegment,
    angular: AngularScale,
    radial: RadialScale,
    *,
    pad_angle: float = 0.0,
    pad_radius: float | None = None,
) -> AnnularSector:
    start, end = angular.band(segment.category)
    return annular_sector(
        radial(segment.offset_start),
        radial(segment.offset_end),
        start,
        end,
        pad_angle=pad_angle,
        pad_radius=pad_radius,
    )
