"""
Vector arithmetic for the Banker's Algorithm.

Elementwise compare/add/subtract over fixed-length integer vectors, plus the
validation helper used at every dimension-sensitive boundary.
"""

import numpy as np
from typing import Sequence

from models.errors import DimensionMismatchError


def _as_array(values) -> np.ndarray:
    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros(0, dtype=int)
    return arr


def _check_shapes(a: np.ndarray, b: np.ndarray) -> None:
    if a.ndim != 1 or b.ndim != 1 or a.shape != b.shape:
        raise DimensionMismatchError(
            f"Vector length mismatch: {a.shape} vs {b.shape}"
        )


def less_or_equal(a: Sequence[int], b: Sequence[int]) -> bool:
    """
    Check a[k] <= b[k] for every index k.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    a, b = _as_array(a), _as_array(b)
    _check_shapes(a, b)
    return bool(np.all(a <= b))


def add(a: Sequence[int], b: Sequence[int]) -> np.ndarray:
    """Elementwise a + b."""
    a, b = _as_array(a), _as_array(b)
    _check_shapes(a, b)
    return a + b


def subtract(a: Sequence[int], b: Sequence[int]) -> np.ndarray:
    """
    Elementwise a - b.

    Does not clamp: callers must already have proven the result non-negative
    before storing it as an Available or Allocation value.
    """
    a, b = _as_array(a), _as_array(b)
    _check_shapes(a, b)
    return a - b


def to_vector(values: Sequence[int], length: int, label: str = "vector") -> np.ndarray:
    """
    Convert values to an independent non-negative integer vector of given length.

    Args:
        values: Any sequence of integers
        length: Required length (usually R)
        label: Name used in error messages

    Returns:
        New numpy integer array (never aliases the input)

    Raises:
        DimensionMismatchError: If values is not a flat sequence of `length` items
        ValueError: If any entry is non-integer or negative
    """
    try:
        arr = np.array(values)
    except ValueError as e:
        raise DimensionMismatchError(f"{label}: not a flat sequence ({e})")

    if arr.ndim == 1 and arr.size == 0 and length == 0:
        return np.zeros(0, dtype=int)
    if arr.ndim != 1 or arr.shape[0] != length:
        raise DimensionMismatchError(
            f"{label}: expected length {length}, got shape {arr.shape}"
        )
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"{label}: entries must be integers, got {list(values)}")
    if np.any(arr < 0):
        raise ValueError(f"{label}: entries cannot be negative, got {arr.tolist()}")

    return arr.astype(int)
