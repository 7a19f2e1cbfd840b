"""Spiral datasets: the JSON record file and an in-memory generator."""

from __future__ import annotations

import json
import logging
import numbers
from pathlib import Path
from typing import Any, Mapping

import numpy as np

from .registry import SpiralData, register_dataset

logger = logging.getLogger(__name__)

FIXTURE_PATH = Path(__file__).parent / "_fixtures" / "spiral_small.json"


class DatasetFormatError(ValueError):
    """A dataset file does not follow the expected record layout."""


def _number(record: Mapping[str, Any], key: str, index: int) -> float:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise DatasetFormatError(f"Record {index}: {key!r} should be a float, got {value!r}")
    return float(value)


def _class_index(record: Mapping[str, Any], index: int) -> int:
    value = record.get("class")
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise DatasetFormatError(
            f"Record {index}: 'class' should be an integer, got {value!r}"
        )
    if value < 0:
        raise DatasetFormatError(f"Record {index}: 'class' must be non-negative, got {value}")
    return int(value)


def parse_spiral_records(payload: Mapping[str, Any]) -> tuple[np.ndarray, np.ndarray]:
    """Turn ``{"data": [{"x", "y", "class"}, ...]}`` into features and labels."""

    records = payload.get("data") if isinstance(payload, Mapping) else None
    if not isinstance(records, list):
        raise DatasetFormatError("Spiral file should hold a 'data' array of records")

    features = np.zeros((len(records), 2), dtype=np.float64)
    labels = np.zeros(len(records), dtype=np.int64)
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise DatasetFormatError(f"Record {idx} should be an object, got {record!r}")
        features[idx, 0] = _number(record, "x", idx)
        features[idx, 1] = _number(record, "y", idx)
        labels[idx] = _class_index(record, idx)
    return features, labels


def load_spiral_json(path: str | Path, num_classes: int | None = None) -> SpiralData:
    """Read a spiral dataset from a JSON record file."""

    path = Path(path)
    try:
        payload = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise DatasetFormatError(f"{path} is not valid JSON: {exc}") from exc
    features, labels = parse_spiral_records(payload)
    if num_classes is None:
        num_classes = int(labels.max()) + 1 if labels.size else 1
    logger.debug("Read %d spiral records from %s", labels.size, path)
    return SpiralData(
        features=features,
        labels=labels,
        num_classes=int(num_classes),
        provenance={"type": "json", "path": str(path)},
    )


def make_spiral(samples: int = 100, classes: int = 3, seed: int = 0) -> SpiralData:
    """Generate ``classes`` interleaved spiral arms of ``samples`` points each."""

    if samples <= 0 or classes <= 0:
        raise ValueError("samples and classes must both be positive")
    rng = np.random.default_rng(seed)
    features = np.zeros((samples * classes, 2), dtype=np.float64)
    labels = np.zeros(samples * classes, dtype=np.int64)
    for class_number in range(classes):
        ix = slice(samples * class_number, samples * (class_number + 1))
        radius = np.linspace(0.0, 1.0, samples)
        theta = (
            np.linspace(class_number * 4.0, (class_number + 1) * 4.0, samples)
            + rng.standard_normal(samples) * 0.2
        )
        features[ix] = np.c_[radius * np.sin(theta * 2.5), radius * np.cos(theta * 2.5)]
        labels[ix] = class_number
    return SpiralData(
        features=features,
        labels=labels,
        num_classes=classes,
        provenance={"type": "synthetic", "samples": samples, "classes": classes, "seed": seed},
    )


def _spiral_factory(samples: int = 100, classes: int = 3, seed: int = 0, **_: object) -> SpiralData:
    return make_spiral(samples=int(samples), classes=int(classes), seed=int(seed))


def _spiral_json_factory(
    path: str | Path | None = None,
    num_classes: int | None = None,
    **_: object,
) -> SpiralData:
    return load_spiral_json(path or FIXTURE_PATH, num_classes=num_classes)


register_dataset("spiral", _spiral_factory)
register_dataset("spiral_json", _spiral_json_factory)


__all__ = [
    "DatasetFormatError",
    "FIXTURE_PATH",
    "load_spiral_json",
    "make_spiral",
    "parse_spiral_records",
]
