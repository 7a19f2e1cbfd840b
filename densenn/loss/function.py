"""Loss function selection and reduction to a scalar."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ..core.errors import DimensionMismatchError
from ..core.types import Array
from .cross_entropy import CrossEntropy, LossCalculation
from .targets import LossTargetData, OneHotTargets, SparseTargets, TargetEncoding

logger = logging.getLogger(__name__)


class LossFunctionType(str, Enum):
    CROSS_ENTROPY = "cross_entropy"


def select_loss(kind: LossFunctionType) -> LossCalculation:
    """Return the implementation behind ``kind``."""

    if kind is LossFunctionType.CROSS_ENTROPY:
        return CrossEntropy()
    raise ValueError(f"Unsupported loss function: {kind}")  # pragma: no cover


def _check_rows(predictions: Array, targets: LossTargetData) -> None:
    if predictions.ndim != 2:
        raise DimensionMismatchError(
            f"Predictions must be a 2-D matrix, got shape {predictions.shape}",
            expected=(len(targets), -1),
            actual=predictions.shape,
        )
    if predictions.shape[0] != len(targets):
        raise DimensionMismatchError(
            f"{predictions.shape[0]} predictions were provided for {len(targets)} targets.",
            expected=len(targets),
            actual=predictions.shape[0],
        )
    if isinstance(targets, OneHotTargets) and targets.num_classes != predictions.shape[1]:
        raise DimensionMismatchError(
            f"Predictions score {predictions.shape[1]} classes, but one-hot targets "
            f"encode {targets.num_classes}.",
            expected=targets.num_classes,
            actual=predictions.shape[1],
        )


@dataclass(frozen=True)
class LossFunction:
    """Score predictions against targets of either encoding."""

    kind: LossFunctionType = LossFunctionType.CROSS_ENTROPY
    _impl: LossCalculation = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_impl", select_loss(self.kind))

    @classmethod
    def from_name(cls, name: str | LossFunctionType) -> "LossFunction":
        if isinstance(name, LossFunctionType):
            return cls(name)
        aliases = {"ce": "cross_entropy", "crossentropy": "cross_entropy"}
        key = str(name).lower()
        try:
            return cls(LossFunctionType(aliases.get(key, key)))
        except ValueError as exc:
            available = ", ".join(k.value for k in LossFunctionType)
            raise KeyError(f"Unknown loss {name!r}. Available losses: {available}") from exc

    def per_example(self, predictions: Array, targets: LossTargetData) -> Array:
        """Return the loss of every example, dispatched on the target encoding."""

        predictions = np.asarray(predictions, dtype=np.float64)
        if predictions.size == 0 and len(targets) == 0:
            return np.zeros(0, dtype=np.float64)
        _check_rows(predictions, targets)
        if targets.encoding is TargetEncoding.ONE_HOT:
            return self._impl.forward_onehot(predictions, targets.data)
        if targets.encoding is TargetEncoding.SPARSE:
            return self._impl.forward_sparse(predictions, targets.indices)
        raise TypeError(f"Unsupported target data: {type(targets).__name__}")

    def calculate(self, predictions: Array, targets: LossTargetData) -> float:
        """Mean loss over the batch; an empty batch scores ``0.0``."""

        losses = self.per_example(predictions, targets)
        if losses.size == 0:
            logger.debug("Empty batch passed to %s; returning 0.0", self.kind.value)
            return 0.0
        return float(np.mean(losses))

    __call__ = calculate


__all__ = ["LossFunction", "LossFunctionType", "select_loss"]
