"""Pixel coordinate and color distance utilities."""

import math
import operator
from typing import Sequence

import numpy as np

from ..core.entities import PixelCoordinate
from ..core.exceptions import (
    ComponentCountMismatchError, InvalidArgumentError, NullOrEmptyInputError,
)


def distance_nd(point0: Sequence[int], point1: Sequence[int]) -> float:
    """Euclidean distance between two points in N-dimensional space."""
    if point0 is None:
        raise NullOrEmptyInputError("Point 0 is None.")
    if point1 is None:
        raise NullOrEmptyInputError("Point 1 is None.")
    if len(point0) < 1:
        raise NullOrEmptyInputError("Point 0 is empty.")
    if len(point0) != len(point1):
        raise ComponentCountMismatchError(
            "Point 0 and point 1 must have the same length.")
    a = np.asarray(point0, dtype=np.float64)
    b = np.asarray(point1, dtype=np.float64)
    return math.sqrt(float(np.sum((a - b) ** 2)))


def pixel_domain_bound(width: int, height: int) -> int:
    """Largest row-major linear pixel index of a width x height sprite."""
    return (height - 1) * width + (width - 1)


def coordinate_from_index(index: int, width: int) -> PixelCoordinate:
    return PixelCoordinate.from_linear_index(index, width)


def to_coordinate(point) -> PixelCoordinate:
    """Normalise a PixelCoordinate or an (x, y) pair to a PixelCoordinate."""
    if point is None:
        raise NullOrEmptyInputError("A key pixel location is None.")
    if isinstance(point, PixelCoordinate):
        return point
    try:
        x, y = point
        return PixelCoordinate(operator.index(x), operator.index(y))
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"Key pixel location must be an integer (x, y) pair, got {point!r}.") from e


def contains(point: PixelCoordinate, width: int, height: int) -> bool:
    return 0 <= point.x < width and 0 <= point.y < height
