"""Loss evaluation: target encodings, cross-entropy and the dispatcher."""

from .cross_entropy import CLIP_EPSILON, CrossEntropy, LossCalculation
from .function import LossFunction, LossFunctionType, select_loss
from .metrics import accuracy
from .targets import (
    LossTargetData,
    OneHotTargets,
    SparseTargets,
    TargetEncoding,
    new_onehot,
    new_sparse,
    one_hot,
)

__all__ = [
    "CLIP_EPSILON",
    "CrossEntropy",
    "LossCalculation",
    "LossFunction",
    "LossFunctionType",
    "LossTargetData",
    "OneHotTargets",
    "SparseTargets",
    "TargetEncoding",
    "accuracy",
    "new_onehot",
    "new_sparse",
    "one_hot",
    "select_loss",
]
