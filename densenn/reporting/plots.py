"""Headless-safe plotting adapters."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np

from ..core.types import Array


class PlotAdapter:
    """Collect scatter views and optionally emit matplotlib SVG figures."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._views: List[Tuple[str, Array, Array, str]] = []
        self.paths: Dict[str, str] = {}
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def scatter(self, name: str, features: Array, labels: Array, title: str = "") -> None:
        """Queue a scatter of the first two feature columns coloured by ``labels``."""

        if not self.enable_plots:
            return
        points = np.asarray(features, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] < 2:
            raise ValueError(f"Scatter plots need at least two feature columns, got {points.shape}")
        self._views.append((name, points, np.asarray(labels), title or name))

    def close(self) -> Dict[str, str]:
        if not self.enable_plots or not self._views:
            return self.paths
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        for name, points, labels, title in self._views:
            fig, ax = plt.subplots(figsize=(8, 6))
            ax.scatter(points[:, 0], points[:, 1], c=labels, cmap="brg", s=12)
            ax.set_xlim(-1.0, 1.0)
            ax.set_ylim(-1.0, 1.0)
            ax.set_xlabel("x")
            ax.set_ylabel("y")
            ax.set_title(title)
            plot_path = self.run_dir / f"{name}.svg"
            fig.savefig(plot_path, format="svg")
            plt.close(fig)
            self.paths[name] = str(plot_path)
        self._views.clear()
        return self.paths
