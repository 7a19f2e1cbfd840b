"""Classification metrics reported alongside the loss."""

from __future__ import annotations

import numpy as np

from ..core.errors import DimensionMismatchError
from ..core.types import Array
from .targets import LossTargetData, to_sparse


def predicted_classes(predictions: Array) -> Array:
    return np.argmax(np.asarray(predictions), axis=1)


def accuracy(predictions: Array, targets: LossTargetData) -> float:
    """Fraction of rows whose highest score lands on the true class."""

    predictions = np.asarray(predictions, dtype=np.float64)
    truth = to_sparse(targets).indices
    if predictions.shape[0] != truth.shape[0]:
        raise DimensionMismatchError(
            f"{predictions.shape[0]} predictions were provided for {truth.shape[0]} targets.",
            expected=truth.shape[0],
            actual=predictions.shape[0],
        )
    if truth.size == 0:
        return 0.0
    return float(np.mean(predicted_classes(predictions) == truth))
