from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from qc_radial.io.read import format_stage_label, load_observations, normalize_observation_columns


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("mesh_&_mould", "mesh & mould"),
        ("pre_pour", "pre pour"),
        ("  final__inspection ", "final inspection"),
        ("curing&stacking", "curing & stacking"),
    ],
)
def test_format_stage_label(raw: str, expected: str) -> None:
    assert format_stage_label(raw) == expected


def test_load_observations_reads_stagewise_csv(tmp_path: Path) -> None:
    csv_path = tmp_path / "qc.csv"
    csv_path.write_text(
        "stage,status,count\nmesh_&_mould,approved,1200\nmesh_&_mould,rejected,100\n",
        encoding="utf-8-sig",
    )

    loaded = load_observations(csv_path)

    assert list(loaded.columns) == ["category", "series", "value"]
    assert loaded["category"].tolist() == ["mesh & mould", "mesh & mould"]
    assert loaded["value"].tolist() == [1200, 100]


def test_load_observations_reads_api_json_export(tmp_path: Path) -> None:
    json_path = tmp_path / "qc.json"
    json_path.write_text(
        json.dumps({"data": [{"stage": "pre_pour", "status": "approved", "count": 4}]}),
        encoding="utf-8",
    )

    loaded = load_observations(json_path)

    assert loaded.to_dict(orient="records") == [
        {"category": "pre pour", "series": "approved", "value": 4}
    ]


def test_load_observations_json_without_data_list_is_empty(tmp_path: Path) -> None:
    json_path = tmp_path / "qc.json"
    json_path.write_text(json.dumps({"data": None}), encoding="utf-8")

    loaded = load_observations(json_path)

    assert loaded.empty
    assert list(loaded.columns) == ["category", "series", "value"]


def test_load_observations_reads_parquet_category_columns(tmp_path: Path) -> None:
    parquet_path = tmp_path / "qc.parquet"
    pd.DataFrame(
        {"category": ["a", "b"], "series": ["x", "x"], "value": [1.0, 2.0], "extra": [0, 0]}
    ).to_parquet(parquet_path, index=False)

    loaded = load_observations(parquet_path)

    assert list(loaded.columns) == ["category", "series", "value"]
    assert loaded["value"].tolist() == [1.0, 2.0]


def test_load_observations_rejects_unknown_suffix(tmp_path: Path) -> None:
    path = tmp_path / "qc.txt"
    path.write_text("", encoding="utf-8")

    with pytest.raises(ValueError, match="Unsupported observation file type"):
        load_observations(path)


def test_normalize_observation_columns_reports_missing_columns() -> None:
    with pytest.raises(ValueError, match="Missing required observation columns: value"):
        normalize_observation_columns(pd.DataFrame({"stage": ["a"], "status": ["x"]}))
