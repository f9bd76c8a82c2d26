from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Literal

import numpy as np
import pandas as pd

LOGGER = logging.getLogger(__name__)

OBSERVATION_COLUMNS = ["category", "series", "value"]

DuplicatePolicy = Literal["sum", "last"]


@dataclass(slots=True, frozen=True)
class Observation:
    category: str
    series: str
    value: float


@dataclass(frozen=True)
class NormalizedObservations:
    frame: pd.DataFrame
    categories: tuple[str, ...]
    series: tuple[str, ...]

    @property
    def empty(self) -> bool:
        return self.frame.empty

    def records(self) -> list[Observation]:
        return [
            Observation(category=str(row.category), series=str(row.series), value=float(row.value))
            for row in self.frame.itertuples(index=False)
        ]


ObservationInput = pd.DataFrame | Iterable[Observation | Mapping[str, Any]] | None


def _as_row(item: object) -> dict[str, Any] | None:
    if is_dataclass(item) and not isinstance(item, type):
        return asdict(item)
    if isinstance(item, Mapping):
        return {column: item.get(column) for column in OBSERVATION_COLUMNS}
    return None


def observations_frame(observations: ObservationInput) -> pd.DataFrame:
    """Coerce any supported observation container into a three-column frame."""
    if observations is None:
        return pd.DataFrame(columns=OBSERVATION_COLUMNS)
    if isinstance(observations, pd.DataFrame):
        frame = observations.copy()
    else:
        rows = [_as_row(item) for item in observations]
        skipped = sum(row is None for row in rows)
        if skipped:
            LOGGER.warning("Skipped %d observation(s) that are not records or mappings", skipped)
        frame = pd.DataFrame([row for row in rows if row is not None])
    return frame.reindex(columns=OBSERVATION_COLUMNS)


def _clean_key(values: pd.Series) -> pd.Series:
    return values.astype(object).map(
        lambda value: None if pd.isna(value) else (str(value).strip() or None)
    )


def normalize_observations(
    observations: ObservationInput,
    *,
    duplicate_policy: DuplicatePolicy = "sum",
) -> NormalizedObservations:
    """Sort observations by (category, series) and derive both domains.

    Rows without a category or series are dropped. Missing, non-numeric and
    non-finite values count as 0; negative values are clamped to 0 so the row
    still contributes its category and series to the domains.
    """
    if duplicate_policy not in ("sum", "last"):
        raise ValueError(f"Unsupported duplicate_policy: {duplicate_policy!r}.")

    working = observations_frame(observations)
    working["category"] = _clean_key(working["category"])
    working["series"] = _clean_key(working["series"])

    missing_key = working["category"].isna() | working["series"].isna()
    if missing_key.any():
        LOGGER.warning("Dropped %d observation(s) without category or series", int(missing_key.sum()))
        working = working.loc[~missing_key]

    values = pd.to_numeric(working["value"], errors="coerce").astype(float)
    values = values.where(np.isfinite(values), 0.0)
    negative = values < 0.0
    if negative.any():
        LOGGER.warning("Clamped %d negative observation value(s) to 0", int(negative.sum()))
    working = working.assign(value=values.clip(lower=0.0))

    if working.empty:
        empty = pd.DataFrame(
            {
                "category": pd.Series(dtype=object),
                "series": pd.Series(dtype=object),
                "value": pd.Series(dtype=float),
            }
        )
        return NormalizedObservations(frame=empty, categories=(), series=())

    if duplicate_policy == "sum":
        working = working.groupby(["category", "series"], sort=False, as_index=False)["value"].sum()
    else:
        working = working.drop_duplicates(subset=["category", "series"], keep="last")

    frame = working.sort_values(["category", "series"], kind="mergesort").reset_index(drop=True)
    frame = frame[OBSERVATION_COLUMNS].astype({"category": str, "series": str, "value": float})
    return NormalizedObservations(
        frame=frame,
        categories=tuple(pd.unique(frame["category"])),
        series=tuple(pd.unique(frame["series"])),
    )
