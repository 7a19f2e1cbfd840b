"""Chains of dense layers with dimensions checked up front."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Sequence

import numpy as np

from .errors import DimensionMismatchError
from .layer import Layer
from .types import Array, LayerSpec


def _coerce_spec(spec: LayerSpec | Mapping[str, object]) -> LayerSpec:
    if isinstance(spec, LayerSpec):
        return spec
    try:
        return LayerSpec(
            neurons=int(spec["neurons"]),
            fan_in=int(spec["fan_in"]),
            activation=str(spec.get("activation", "relu")),
        )
    except KeyError as exc:
        raise KeyError(f"Layer config is missing {exc.args[0]!r}: {dict(spec)}") from exc


@dataclass
class Network:
    """Feed-forward stack of :class:`Layer` objects.

    Adjacent layers must agree: every layer's ``fan_in`` equals the previous
    layer's ``neurons``. This is checked when the network is built so a bad
    architecture never reaches :meth:`forward`.
    """

    layers: List[Layer] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.layers = list(self.layers)
        if not self.layers:
            raise ValueError("A network needs at least one layer")
        for idx in range(1, len(self.layers)):
            prev, layer = self.layers[idx - 1], self.layers[idx]
            if layer.fan_in != prev.neurons:
                raise DimensionMismatchError(
                    f"Layer {idx} expects {layer.fan_in} inputs, but layer {idx - 1} "
                    f"produces {prev.neurons} outputs.",
                    expected=prev.neurons,
                    actual=layer.fan_in,
                )

    @classmethod
    def from_config(
        cls,
        layer_specs: Iterable[LayerSpec | Mapping[str, object]],
        seed: int | None = None,
    ) -> "Network":
        """Build a network from layer specs sharing one random generator."""

        rng = np.random.default_rng(seed)
        layers = [
            Layer(spec.neurons, spec.fan_in, spec.activation, rng=rng)
            for spec in map(_coerce_spec, layer_specs)
        ]
        return cls(layers)

    @property
    def input_dim(self) -> int:
        return self.layers[0].fan_in

    @property
    def output_dim(self) -> int:
        return self.layers[-1].neurons

    def describe(self) -> Sequence[LayerSpec]:
        return [
            LayerSpec(layer.neurons, layer.fan_in, layer.activation.name)
            for layer in self.layers
        ]

    def parameter_count(self) -> int:
        return int(sum(layer.parameter_count() for layer in self.layers))

    def forward_all(self, inputs: Array) -> List[Array]:
        """Return the output of every layer, in order."""

        outputs: List[Array] = []
        x = inputs
        for layer in self.layers:
            x = layer.forward(x)
            outputs.append(x)
        return outputs

    def forward(self, inputs: Array) -> Array:
        return self.forward_all(inputs)[-1]

    __call__ = forward
