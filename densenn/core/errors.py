"""Exceptions raised by the numerical core."""

from __future__ import annotations

from typing import Tuple, Union

Shape = Union[int, Tuple[int, ...]]


class DimensionMismatchError(ValueError):
    """An array does not have the dimensions a layer or loss requires.

    The error is recoverable: the object that raised it is left exactly as it
    was before the call.
    """

    def __init__(self, message: str, *, expected: Shape, actual: Shape) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
