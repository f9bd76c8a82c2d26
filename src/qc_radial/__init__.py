"""Radial stacked bar charts for precast QC stage reporting."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "precast-qc-radial"

try:
    __version__ = version(DISTRIBUTION_NAME)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["DISTRIBUTION_NAME", "__version__"]
