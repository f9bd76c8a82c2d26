from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import pandas as pd

TableFormat = Literal["csv", "parquet", "json"]


def write_table(df: pd.DataFrame, path: Path, fmt: TableFormat = "csv") -> Path:
    """Write stacked segments (or any table) next to the figure that was drawn from it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "csv":
        df.to_csv(path, index=False)
    elif fmt == "parquet":
        df.to_parquet(path, index=False)
    elif fmt == "json":
        df.to_json(path, orient="records", indent=2)
    else:
        raise ValueError(f"Unsupported table format: {fmt}")
    return path


def write_summary(data: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return path
