"""Core numerical primitives for densenn."""

from . import activations, errors, layer, network, types

__all__ = ["activations", "errors", "layer", "network", "types"]
