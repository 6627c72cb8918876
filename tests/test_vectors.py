"""
Vector arithmetic tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.errors import DimensionMismatchError
from models.vectors import add, less_or_equal, subtract, to_vector


def test_less_or_equal():
    assert less_or_equal([1, 2, 3], [1, 2, 3])
    assert less_or_equal([0, 0, 0], [1, 2, 3])
    assert not less_or_equal([2, 0, 0], [1, 5, 5])
    assert less_or_equal([], [])


def test_less_or_equal_returns_plain_bool():
    assert type(less_or_equal(np.array([1]), np.array([2]))) is bool


def test_length_mismatch_raises():
    with pytest.raises(DimensionMismatchError):
        less_or_equal([1, 2], [1, 2, 3])
    with pytest.raises(DimensionMismatchError):
        add([1], [1, 2])
    with pytest.raises(DimensionMismatchError):
        subtract([1, 2, 3], [1])


def test_add_and_subtract_are_elementwise():
    assert add([1, 2, 3], [3, 2, 1]).tolist() == [4, 4, 4]
    assert subtract([5, 3, 2], [1, 0, 2]).tolist() == [4, 3, 0]


def test_subtract_does_not_clamp():
    assert subtract([1, 0], [2, 1]).tolist() == [-1, -1]


def test_add_does_not_mutate_inputs():
    a = np.array([1, 1])
    b = np.array([2, 2])
    add(a, b)
    subtract(a, b)
    assert a.tolist() == [1, 1]
    assert b.tolist() == [2, 2]


def test_to_vector_copies_input():
    source = np.array([1, 2, 3])
    vec = to_vector(source, 3)
    vec[0] = 99
    assert source[0] == 1


def test_to_vector_validation():
    assert to_vector([], 0).tolist() == []
    assert to_vector((4, 5), 2).tolist() == [4, 5]

    with pytest.raises(DimensionMismatchError):
        to_vector([1, 2], 3)
    with pytest.raises(DimensionMismatchError):
        to_vector([[1, 2]], 2)
    with pytest.raises(DimensionMismatchError):
        to_vector([[]], 0)
    with pytest.raises(DimensionMismatchError):
        to_vector(np.zeros((3, 0), dtype=int), 0)
    with pytest.raises(ValueError):
        to_vector([1.5, 2], 2)
    with pytest.raises(ValueError):
        to_vector([True, False], 2)
    with pytest.raises(ValueError):
        to_vector([1, -1], 2)
