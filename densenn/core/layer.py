"""Dense layer: affine transform followed by an activation."""

from __future__ import annotations

import logging

import numpy as np

from .activations import Activation, ActivationFunction
from .errors import DimensionMismatchError
from .types import Array

logger = logging.getLogger(__name__)

WEIGHT_SCALE = 0.01


def _check_dim(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return int(value)


class Layer:
    """A fully connected layer of ``neurons`` units, each with ``fan_in`` inputs.

    Weights are held as a ``(fan_in, neurons)`` matrix so that each neuron's
    weights form one column and ``inputs @ weights`` maps ``R×F`` to ``R×N``.
    Both dimensions are fixed for the lifetime of the layer.

    Parameters
    ----------
    neurons:
        Number of neurons ``N`` (output columns).
    fan_in:
        Number of inputs ``F`` each neuron receives.
    activation:
        Activation applied after the affine transform.
    seed, rng:
        Source of randomness for the initial weights. ``rng`` wins when both
        are given.
    """

    def __init__(
        self,
        neurons: int,
        fan_in: int,
        activation: Activation | str = Activation.RELU,
        *,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._neurons = _check_dim("neurons", neurons)
        self._fan_in = _check_dim("fan_in", fan_in)
        self.activation = ActivationFunction.from_name(activation)
        if rng is None:
            rng = np.random.default_rng(seed)
        self._weights = WEIGHT_SCALE * rng.standard_normal((self._fan_in, self._neurons))
        self._biases = np.zeros(self._neurons, dtype=np.float64)

    @property
    def neurons(self) -> int:
        return self._neurons

    @property
    def fan_in(self) -> int:
        return self._fan_in

    @property
    def weights(self) -> Array:
        """Copy of the ``(fan_in, neurons)`` weight matrix."""

        return self._weights.copy()

    @property
    def biases(self) -> Array:
        return self._biases.copy()

    def parameter_count(self) -> int:
        return int(self._weights.size + self._biases.size)

    def set_weights(self, weights: Array) -> None:
        """Replace the weights with one row of ``fan_in`` values per neuron.

        Raises :class:`DimensionMismatchError` without touching the current
        weights when ``weights`` is not exactly ``neurons × fan_in``.
        """

        new = np.array(weights, dtype=np.float64)
        if new.ndim != 2:
            self._reject_weights(
                f"Weights must be a 2-D matrix of {self._neurons}x{self._fan_in}, "
                f"but an array with {new.ndim} dimension(s) was provided.",
                new.shape,
            )
        rows, cols = new.shape
        if rows != self._neurons:
            self._reject_weights(
                f"{self._neurons} neurons exist in this layer, but {rows} sets of "
                "weights were provided.",
                new.shape,
            )
        if cols != self._fan_in:
            self._reject_weights(
                f"Neurons in this layer have {self._fan_in} weights each, but {cols} "
                "weights were provided in each set.",
                new.shape,
            )
        self._weights = new.T.copy()

    def set_biases(self, biases: Array) -> None:
        """Replace the biases; ``biases`` must hold exactly ``neurons`` values."""

        new = np.array(biases, dtype=np.float64)
        if new.ndim != 1 or new.shape[0] != self._neurons:
            count = new.shape[0] if new.ndim == 1 else new.size
            logger.debug("Rejected biases of shape %s for %r", new.shape, self)
            raise DimensionMismatchError(
                f"{self._neurons} neurons exist in this layer, but {count} biases "
                "were provided.",
                expected=self._neurons,
                actual=new.shape,
            )
        self._biases = new

    def forward(self, inputs: Array) -> Array:
        """Return ``activation(inputs @ weights + biases)`` with shape ``R×N``."""

        x = np.asarray(inputs, dtype=np.float64)
        if x.ndim != 2 or x.shape[1] != self._fan_in:
            raise DimensionMismatchError(
                f"Layer expects inputs with {self._fan_in} columns, but received "
                f"an array of shape {x.shape}.",
                expected=(-1, self._fan_in),
                actual=x.shape,
            )
        return self.activation.forward(x @ self._weights + self._biases)

    __call__ = forward

    def __repr__(self) -> str:
        return (
            f"Layer(neurons={self._neurons}, fan_in={self._fan_in}, "
            f"activation={self.activation.name!r})"
        )

    def _reject_weights(self, message: str, shape: tuple) -> None:
        logger.debug("Rejected weights of shape %s for %r", shape, self)
        raise DimensionMismatchError(
            message, expected=(self._neurons, self._fan_in), actual=tuple(shape)
        )
