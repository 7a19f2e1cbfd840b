"""Target labels in one-hot or sparse encoding.

The two encodings are separate types, each holding only its own payload, so
code that receives a :data:`LossTargetData` can dispatch on its ``encoding``
without ever asking a variant for the other shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

import numpy as np

from ..core.types import Array


class TargetEncoding(str, Enum):
    ONE_HOT = "one_hot"
    SPARSE = "sparse"


@dataclass(frozen=True, eq=False)
class OneHotTargets:
    """One indicator row per example, ``1`` at the true class."""

    data: Array
    encoding: ClassVar[TargetEncoding] = TargetEncoding.ONE_HOT

    @property
    def num_classes(self) -> int:
        return int(self.data.shape[1])

    def __len__(self) -> int:
        return int(self.data.shape[0])


@dataclass(frozen=True, eq=False)
class SparseTargets:
    """One integer class index per example."""

    indices: Array
    encoding: ClassVar[TargetEncoding] = TargetEncoding.SPARSE

    def __len__(self) -> int:
        return int(self.indices.shape[0])


LossTargetData = Union[OneHotTargets, SparseTargets]


def new_onehot(data: Array) -> OneHotTargets:
    """Wrap a 2-D one-hot matrix as loss targets."""

    array = np.asarray(data)
    if array.ndim != 2:
        raise ValueError(
            f"One-hot targets must be a 2-D matrix, got an array of shape {array.shape}"
        )
    if array.dtype.kind not in "biuf":
        raise ValueError(f"One-hot targets must be real-valued, got dtype {array.dtype}")
    array = array.astype(np.float64)
    array.setflags(write=False)
    return OneHotTargets(array)


def new_sparse(data: Array) -> SparseTargets:
    """Wrap a 1-D vector of non-negative class indices as loss targets."""

    array = np.asarray(data)
    if array.ndim != 1:
        raise ValueError(
            f"Sparse targets must be a 1-D vector of class indices, got an array of "
            f"shape {array.shape}"
        )
    integral = array.dtype.kind in "iu" or (
        array.dtype.kind == "f" and bool(np.all(np.mod(array, 1) == 0))
    )
    if not integral:
        raise ValueError(f"Sparse targets must hold integers, got dtype {array.dtype}")
    array = array.astype(np.int64)
    if array.size and array.min() < 0:
        raise ValueError("Sparse targets must be non-negative class indices")
    array.setflags(write=False)
    return SparseTargets(array)


def one_hot(indices: Array, num_classes: int) -> Array:
    """Return the ``(n, num_classes)`` indicator matrix for ``indices``."""

    idx = np.asarray(indices, dtype=np.int64).reshape(-1)
    out = np.zeros((idx.shape[0], num_classes), dtype=np.float64)
    out[np.arange(idx.shape[0]), idx] = 1.0
    return out


def to_onehot(targets: LossTargetData, num_classes: int) -> OneHotTargets:
    if isinstance(targets, OneHotTargets):
        return targets
    return new_onehot(one_hot(targets.indices, num_classes))


def to_sparse(targets: LossTargetData) -> SparseTargets:
    if isinstance(targets, SparseTargets):
        return targets
    if len(targets) == 0:
        return new_sparse(np.zeros(0, dtype=np.int64))
    return new_sparse(np.argmax(targets.data, axis=1))


__all__ = [
    "LossTargetData",
    "OneHotTargets",
    "SparseTargets",
    "TargetEncoding",
    "new_onehot",
    "new_sparse",
    "one_hot",
    "to_onehot",
    "to_sparse",
]
