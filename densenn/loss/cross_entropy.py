"""Categorical cross-entropy."""

from __future__ import annotations

from typing import Protocol

import numpy as np

from ..core.errors import DimensionMismatchError
from ..core.types import Array

CLIP_EPSILON = 1e-7


class LossCalculation(Protocol):
    """Per-example loss for both target encodings."""

    def forward_onehot(self, outputs: Array, targets: Array) -> Array:
        """Return one loss value per row of ``outputs``."""

    def forward_sparse(self, outputs: Array, indices: Array) -> Array:
        """Return one loss value per row of ``outputs``."""


class CrossEntropy:
    """Negative log of the confidence assigned to the true class."""

    epsilon: float = CLIP_EPSILON

    def clip(self, values: Array) -> Array:
        """Clip into ``[eps, 1 - eps]``.

        The upper bound mirrors the lower one so that clipping does not pull
        the mean loss in one direction.
        """

        return np.clip(np.asarray(values, dtype=np.float64), self.epsilon, 1.0 - self.epsilon)

    @staticmethod
    def correct_confidences_sparse(outputs: Array, indices: Array) -> Array:
        outputs = np.asarray(outputs, dtype=np.float64)
        idx = np.asarray(indices, dtype=np.int64)
        if idx.ndim != 1 or idx.shape[0] != outputs.shape[0]:
            raise DimensionMismatchError(
                f"{outputs.shape[0]} predictions were provided for {idx.shape} class indices.",
                expected=outputs.shape[0],
                actual=idx.shape,
            )
        if idx.size:
            bad = idx[(idx < 0) | (idx >= outputs.shape[1])]
            if bad.size:
                raise IndexError(
                    f"Class index {int(bad[0])} is out of range for {outputs.shape[1]} classes"
                )
        return outputs[np.arange(idx.shape[0]), idx]

    @staticmethod
    def correct_confidences_onehot(outputs: Array, targets: Array) -> Array:
        outputs = np.asarray(outputs, dtype=np.float64)
        targets = np.asarray(targets, dtype=np.float64)
        if targets.shape != outputs.shape:
            raise DimensionMismatchError(
                f"One-hot targets of shape {targets.shape} do not match predictions of "
                f"shape {outputs.shape}.",
                expected=outputs.shape,
                actual=targets.shape,
            )
        return np.sum(outputs * targets, axis=1)

    @staticmethod
    def negative_log(confidences: Array) -> Array:
        return -np.log(confidences)

    def forward_onehot(self, outputs: Array, targets: Array) -> Array:
        confidences = self.correct_confidences_onehot(self.clip(outputs), targets)
        return self.negative_log(confidences)

    def forward_sparse(self, outputs: Array, indices: Array) -> Array:
        confidences = self.correct_confidences_sparse(self.clip(outputs), indices)
        return self.negative_log(confidences)


__all__ = ["CLIP_EPSILON", "CrossEntropy", "LossCalculation"]
