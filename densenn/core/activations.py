"""Activation utilities for densenn."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .types import Array


class Activation(str, Enum):
    """Closed set of activations a layer can be bound to."""

    RELU = "relu"
    SOFTMAX = "softmax"


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def softmax(x: Array) -> Array:
    """Return a row-wise probability distribution over the columns of ``x``.

    Each row has its own maximum subtracted before exponentiating. A single
    global maximum would also prevent overflow, but a row sitting far below it
    underflows to all zeros and divides ``0 / 0``; the per-row shift keeps the
    largest entry of every row at ``exp(0) == 1``.
    """

    x = np.asarray(x, dtype=np.float64)
    shifted = x - np.max(x, axis=1, keepdims=True)
    exp = np.exp(shifted)
    return exp / np.sum(exp, axis=1, keepdims=True)


@dataclass(frozen=True)
class ActivationFunction:
    """Stateless activation bound to a layer at construction."""

    kind: Activation = Activation.RELU

    @classmethod
    def from_name(cls, name: str | Activation) -> "ActivationFunction":
        if isinstance(name, Activation):
            return cls(name)
        try:
            return cls(Activation(str(name).lower()))
        except ValueError as exc:
            available = ", ".join(a.value for a in Activation)
            raise ValueError(
                f"Unknown activation {name!r}. Available activations: {available}"
            ) from exc

    @property
    def name(self) -> str:
        return self.kind.value

    def forward(self, inputs: Array) -> Array:
        """Apply the activation; the output has the shape of ``inputs``."""

        if self.kind is Activation.RELU:
            return relu(inputs)
        if self.kind is Activation.SOFTMAX:
            return softmax(inputs)
        raise ValueError(f"Unsupported activation: {self.kind}")  # pragma: no cover

    __call__ = forward
