"""Core typing contracts for densenn."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class LayerSpec:
    """Construction parameters of a single dense layer."""

    neurons: int
    fan_in: int
    activation: str = "relu"


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`densenn.pipelines.run_pipeline`."""

    loss: float
    accuracy: float
    output_shape: Tuple[int, int]
    previews: List[Array] = field(default_factory=list)
    manifest_path: str = ""
    plot_paths: Dict[str, str] = field(default_factory=dict)
