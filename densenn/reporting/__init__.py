"""Reporting utilities for densenn."""

from .artifacts import write_manifest
from .plots import PlotAdapter

__all__ = ["write_manifest", "PlotAdapter"]
