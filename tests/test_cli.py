from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from qc_radial.cli import app

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = REPO_ROOT / "configs" / "default.yaml"


def _write_input(tmp_path: Path) -> Path:
    csv_path = tmp_path / "qc.csv"
    csv_path.write_text(
        "stage,status,count\n"
        "mesh_&_mould,approved,1200\n"
        "mesh_&_mould,rejected,100\n"
        "pre_pour,approved,40\n",
        encoding="utf-8",
    )
    return csv_path


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "render" in result.stdout
    assert "summary" in result.stdout


def test_render_command_writes_outputs(tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "render",
            "--input",
            str(_write_input(tmp_path)),
            "--out",
            str(out_dir),
            "--config",
            str(DEFAULT_CONFIG),
            "--theme",
            "dark",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Chart (ok) written to" in result.stdout
    svg = (out_dir / "figures" / "qc_radial.svg").read_text(encoding="utf-8")
    assert "color: #e5e7eb" in svg
    summary = json.loads((out_dir / "summary" / "qc_radial.json").read_text(encoding="utf-8"))
    assert summary["totals"] == {"mesh & mould": 1300.0, "pre pour": 40.0}
    assert (out_dir / "report.html").exists()


def test_render_command_format_override(tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "render",
            "--input",
            str(_write_input(tmp_path)),
            "--out",
            str(out_dir),
            "--config",
            str(DEFAULT_CONFIG),
            "--format",
            "png",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (out_dir / "figures" / "qc_radial.png").exists()


def test_render_command_requires_input_in_file_mode(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["render", "--out", str(tmp_path / "out"), "--config", str(DEFAULT_CONFIG)],
    )

    assert result.exit_code != 0
    assert "Missing --input" in result.output


def test_summary_command_prints_stage_totals(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["summary", "--input", str(_write_input(tmp_path)), "--config", str(DEFAULT_CONFIG)],
    )

    assert result.exit_code == 0, result.output
    assert "mesh & mould: 1,300 (approved=1,200, rejected=100)" in result.stdout
    assert "pre pour: 40 (approved=40)" in result.stdout


def test_summary_command_on_empty_input(tmp_path: Path) -> None:
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("stage,status,count\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["summary", "--input", str(csv_path), "--config", str(DEFAULT_CONFIG)],
    )

    assert result.exit_code == 0, result.output
    assert "No qc data available." in result.stdout
