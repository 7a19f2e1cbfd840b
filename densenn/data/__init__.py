"""Dataset registry and loader helpers."""

# Ensure built-in datasets register themselves when the package is imported.
from . import spiral as _spiral  # noqa: F401
from .registry import (
    SpiralData,
    available_datasets,
    get_dataset,
    register_dataset,
)
from .spiral import DatasetFormatError, load_spiral_json, make_spiral

__all__ = [
    "DatasetFormatError",
    "SpiralData",
    "available_datasets",
    "get_dataset",
    "load_spiral_json",
    "make_spiral",
    "register_dataset",
]
