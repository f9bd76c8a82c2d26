from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from qc_radial.chart.normalize import NormalizedObservations


@dataclass(slots=True, frozen=True)
class StackedSegment:
    category: str
    series: str
    offset_start: float
    offset_end: float

    @property
    def value(self) -> float:
        return self.offset_end - self.offset_start

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "series": self.series,
            "offset_start": self.offset_start,
            "offset_end": self.offset_end,
            "value": self.value,
        }


@dataclass(frozen=True)
class StackLayout:
    categories: tuple[str, ...]
    series: tuple[str, ...]
    segments: tuple[StackedSegment, ...]
    totals: dict[str, float] = field(default_factory=dict)

    @property
    def max_total(self) -> float:
        return max(self.totals.values(), default=0.0)

    def segments_for(self, category: str) -> list[StackedSegment]:
        return [segment for segment in self.segments if segment.category == category]

    def to_frame(self) -> pd.DataFrame:
        columns = ["category", "series", "offset_start", "offset_end", "value"]
        return pd.DataFrame([segment.to_dict() for segment in self.segments], columns=columns)


def resolve_series_order(
    appearance: Sequence[str],
    explicit: Sequence[str] | None = None,
) -> tuple[str, ...]:
    """Explicitly listed series first, then the rest in first-appearance order.

    Listed series that never appear in the data are ignored.
    """
    if not explicit:
        return tuple(appearance)
    present = set(appearance)
    ordered = [key for key in dict.fromkeys(explicit) if key in present]
    listed = set(ordered)
    ordered.extend(key for key in appearance if key not in listed)
    return tuple(ordered)


def build_stack(
    normalized: NormalizedObservations,
    *,
    series_order: Sequence[str] | None = None,
) -> StackLayout:
    """Accumulate per-category offsets in stacking order.

    Absent (category, series) pairs contribute zero width: no segment is
    emitted for them and later series keep stacking from the running offset.
    """
    categories = normalized.categories
    order = resolve_series_order(normalized.series, series_order)
    if not categories or not order:
        return StackLayout(categories=categories, series=order, segments=(), totals={})

    frame = normalized.frame
    matrix = (
        frame.pivot_table(
            index="category",
            columns="series",
            values="value",
            aggfunc="sum",
            fill_value=0.0,
        )
        .reindex(index=list(categories), columns=list(order), fill_value=0.0)
        .to_numpy(dtype=float)
    )
    ends = np.cumsum(matrix, axis=1)
    starts = np.hstack([np.zeros((len(categories), 1)), ends[:, :-1]])
    present = set(zip(frame["category"], frame["series"]))

    segments: list[StackedSegment] = []
    for series_index, series_key in enumerate(order):
        for category_index, category in enumerate(categories):
            if (category, series_key) not in present:
                continue
            segments.append(
                StackedSegment(
                    category=category,
                    series=series_key,
                    offset_start=float(starts[category_index, series_index]),
                    offset_end=float(ends[category_index, series_index]),
                )
            )

    totals = {category: float(ends[index, -1]) for index, category in enumerate(categories)}
    return StackLayout(categories=categories, series=order, segments=tuple(segments), totals=totals)
