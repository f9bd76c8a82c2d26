from __future__ import annotations

import json
import re
from pathlib import Path

import pandas as pd

from qc_radial.chart.normalize import OBSERVATION_COLUMNS

STAGEWISE_COLUMNS = {"stage": "category", "status": "series", "count": "value"}


def format_stage_label(stage: object) -> str:
    """``"mesh_&_mould"`` -> ``"mesh & mould"``, ``"pre_pour"`` -> ``"pre pour"``."""
    text = str(stage).replace("_", " ")
    text = re.sub(r"\s*&\s*", " & ", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def normalize_observation_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Accept either stage/status/count or category/series/value columns."""
    working = df.copy()
    if "stage" in working.columns and "category" not in working.columns:
        working["stage"] = working["stage"].map(
            lambda value: value if pd.isna(value) else format_stage_label(value)
        )
    rename_map = {
        source: target
        for source, target in STAGEWISE_COLUMNS.items()
        if target not in working.columns
    }
    working = working.rename(columns=rename_map)
    missing = [column for column in OBSERVATION_COLUMNS if column not in working.columns]
    if missing:
        missing_str = ", ".join(missing)
        raise ValueError(f"Missing required observation columns: {missing_str}")
    return working[OBSERVATION_COLUMNS]


def _read_json_rows(path: Path) -> pd.DataFrame:
    payload = json.loads(path.read_text(encoding="utf-8"))
    rows = payload.get("data") if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        return pd.DataFrame(columns=OBSERVATION_COLUMNS)
    return pd.DataFrame([row for row in rows if isinstance(row, dict)])


def load_observations(path: Path) -> pd.DataFrame:
    """Load QC observations from a CSV/Parquet table or a JSON export of the stagewise endpoint."""
    if path.suffix == ".csv":
        # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
        frame = pd.read_csv(path, encoding="utf-8-sig")
    elif path.suffix == ".parquet":
        frame = pd.read_parquet(path)
    elif path.suffix == ".json":
        frame = _read_json_rows(path)
    else:
        raise ValueError(f"Unsupported observation file type: {path.suffix}")
    if frame.empty and not len(frame.columns):
        return pd.DataFrame(columns=OBSERVATION_COLUMNS)
    return normalize_observation_columns(frame)
