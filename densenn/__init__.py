"""densenn public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.activations import Activation, ActivationFunction, relu, softmax
from .core.errors import DimensionMismatchError
from .core.layer import Layer
from .core.network import Network
from .loss import (
    CrossEntropy,
    LossFunction,
    LossFunctionType,
    OneHotTargets,
    SparseTargets,
    TargetEncoding,
    accuracy,
    new_onehot,
    new_sparse,
)
from .pipelines import load_preset, presets, run_pipeline

__all__ = [
    "Activation",
    "ActivationFunction",
    "CrossEntropy",
    "DimensionMismatchError",
    "Layer",
    "LossFunction",
    "LossFunctionType",
    "Network",
    "OneHotTargets",
    "SparseTargets",
    "TargetEncoding",
    "accuracy",
    "activations",
    "load_preset",
    "new_onehot",
    "new_sparse",
    "presets",
    "relu",
    "run_pipeline",
    "softmax",
    "types",
]
