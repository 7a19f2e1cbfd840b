"""Dataset registry and metadata contracts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, MutableMapping

import numpy as np

from ..core.types import Array
from ..core.errors import DimensionMismatchError
from ..loss.targets import LossTargetData, TargetEncoding, new_sparse, to_onehot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpiralData:
    """Labelled 2-D points.

    Attributes
    ----------
    features:
        ``(n, d)`` float64 matrix, one row per example.
    labels:
        ``(n,)`` int64 class indices.
    num_classes:
        Number of classes the labels are drawn from.
    provenance:
        Where the data came from (generator parameters or source file).
    """

    features: Array
    labels: Array
    num_classes: int
    provenance: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.features.ndim != 2:
            raise ValueError(f"features must be 2-D, got shape {self.features.shape}")
        if self.labels.shape != (self.features.shape[0],):
            raise ValueError(
                f"Expected {self.features.shape[0]} labels, got shape {self.labels.shape}"
            )

    def __len__(self) -> int:
        return int(self.features.shape[0])

    @property
    def d_in(self) -> int:
        return int(self.features.shape[1])

    def targets(
        self,
        encoding: TargetEncoding | str = TargetEncoding.SPARSE,
        num_classes: int | None = None,
    ) -> LossTargetData:
        """Return the labels as loss targets in ``encoding``.

        One-hot rows are ``num_classes`` wide, defaulting to the dataset's own
        ``num_classes``; pass a model's output width to score against it.
        """

        width = self.num_classes if num_classes is None else int(num_classes)
        if len(self) and int(self.labels.max()) >= width:
            raise DimensionMismatchError(
                f"Label {int(self.labels.max())} does not fit in {width} classes.",
                expected=width,
                actual=int(self.labels.max()) + 1,
            )
        sparse = new_sparse(self.labels)
        if TargetEncoding(encoding) is TargetEncoding.ONE_HOT:
            return to_onehot(sparse, width)
        return sparse


DatasetFactory = Callable[..., SpiralData]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("spiral")
        def make_spiral(**kwargs):
            ...

    or directly::

        register_dataset("spiral", make_spiral)
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_dataset(dataset: str | None = None, /, **options: Any) -> SpiralData:
    """Build the dataset registered as ``dataset`` with ``options``."""

    if dataset is None:
        if "name" in options:
            dataset = str(options.pop("name"))
        else:
            raise TypeError("Dataset name must be provided")

    if dataset not in _REGISTRY:
        available = ", ".join(available_datasets())
        raise KeyError(f"Unknown dataset {dataset!r}. Available datasets: {available}")

    data = _REGISTRY[dataset](**options)
    _validate(data)
    logger.info(
        "Loaded dataset %s: %d examples, %d features, %d classes",
        dataset,
        len(data),
        data.d_in,
        data.num_classes,
    )
    return data


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate(data: SpiralData) -> None:
    if data.num_classes <= 0:
        raise ValueError(f"num_classes must be positive, got {data.num_classes}")
    if len(data) and (data.labels.min() < 0 or data.labels.max() >= data.num_classes):
        raise ValueError(
            f"Labels must lie in [0, {data.num_classes}), got "
            f"[{int(data.labels.min())}, {int(data.labels.max())}]"
        )
    if not np.all(np.isfinite(data.features)):
        raise ValueError("Dataset features must be finite")


__all__ = [
    "DatasetFactory",
    "SpiralData",
    "available_datasets",
    "get_dataset",
    "register_dataset",
]
