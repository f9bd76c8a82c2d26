from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class OutputPaths:
    root: Path
    figures: Path
    tables: Path
    summary: Path

    def figure(self, stem: str, fmt: str) -> Path:
        return self.figures / f"{stem}.{fmt}"

    def table(self, stem: str, fmt: str) -> Path:
        return self.tables / f"{stem}.{fmt}"

    def summary_file(self, stem: str) -> Path:
        return self.summary / f"{stem}.json"


def build_output_paths(out_dir: Path) -> OutputPaths:
    """Lay out ``out_dir`` as figures/, tables/ and summary/ and create them."""
    paths = OutputPaths(
        root=out_dir,
        figures=out_dir / "figures",
        tables=out_dir / "tables",
        summary=out_dir / "summary",
    )
    for directory in (paths.root, paths.figures, paths.tables, paths.summary):
        directory.mkdir(parents=True, exist_ok=True)
    return paths
