# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from mtl import (
    ElementTypeError,
    InvalidArgument,
    Matrix,
    SizeMismatch,
    as_matrix,
)

TEST_ITERATIONS = 20
logger = logging.getLogger(__name__)


def test_addition_of_two_matrices():
    m1 = Matrix(2, 2, [1, 1, 1, 1], dtype=np.float32)
    m2 = Matrix(2, 2, [1, 1, 1, 1], dtype=np.float32)
    result = Matrix(2, 2, [2, 2, 2, 2], dtype=np.float32)
    assert m1 + m2 == result
    # operands untouched
    assert m1 == Matrix(2, 2, fill=1, dtype=np.float32)


def test_subtraction():
    a = Matrix.from_rows([[5, 6], [7, 8]])
    b = Matrix.from_rows([[1, 2], [3, 4]])
    assert (a - b).tolist() == [[4, 4], [4, 4]]
    a -= b
    assert a.tolist() == [[4, 4], [4, 4]]


def test_in_place_add_checks_shape_before_mutating():
    a = Matrix(2, 2, fill=1)
    with pytest.raises(SizeMismatch):
        a += Matrix(2, 3)
    with pytest.raises(SizeMismatch):
        a -= Matrix(3, 2)
    assert a == Matrix(2, 2, fill=1)


def test_in_place_add_checks_element_type():
    a = Matrix(2, 2)
    with pytest.raises(ElementTypeError):
        a += Matrix(2, 2, dtype=float)
    # an integer operand may be added to a float matrix
    f = Matrix(2, 2, fill=0.5, dtype=float)
    f += Matrix(2, 2, fill=1)
    assert f.tolist() == [[1.5, 1.5], [1.5, 1.5]]


def test_add_non_matrix_is_type_error():
    with pytest.raises(TypeError):
        Matrix(1, 1) + 1


def test_square_multiplication():
    a = Matrix.from_rows([[1, 2], [3, 4]])
    assert a * a == Matrix.from_rows([[7, 10], [15, 22]])


def test_non_square_multiplication():
    a = Matrix(3, 2, [1, 2, 3, 4, 5, 6])
    b = Matrix(2, 3, [1, 2, 3, 4, 5, 6])
    result = a * b
    assert result.size() == (3, 3)
    assert result == Matrix(3, 3, [9, 12, 15, 19, 26, 33, 29, 40, 51])
    # value-returning product leaves the operands alone
    assert a.size() == (3, 2)
    assert not a.is_reallocated()


def test_in_place_multiplication_reallocates():
    a = Matrix(3, 2, [1, 2, 3, 4, 5, 6])
    a *= Matrix(2, 1, [1, 1])
    assert a.size() == (3, 1)
    assert a.declared_size() == (3, 2)
    assert a.is_reallocated()
    assert a.tolist() == [[3], [7], [11]]


def test_multiplication_dimension_mismatch():
    a = Matrix(2, 3)
    with pytest.raises(SizeMismatch):
        a *= Matrix(2, 3)
    assert a.size() == (2, 3)
    assert not a.is_reallocated()


def test_multiplication_matches_numpy():
    rng = np.random.default_rng(0)
    for _ in range(TEST_ITERATIONS):
        m, k, n = rng.integers(1, 6, size=3)
        A = rng.integers(-20, 20, size=(m, k))
        B = rng.integers(-20, 20, size=(k, n))
        ours = as_matrix(A) * as_matrix(B)
        logger.debug(f"\n{A}\n@\n{B}\n=\n{ours}")
        np.testing.assert_array_equal(ours.underlying_array(), A @ B)


def test_scalar_multiplication():
    a = Matrix.from_rows([[1, 2], [3, 4]])
    assert (a * 3).tolist() == [[3, 6], [9, 12]]
    assert (3 * a).tolist() == [[3, 6], [9, 12]]
    assert a.tolist() == [[1, 2], [3, 4]]
    a *= -1
    assert a.tolist() == [[-1, -2], [-3, -4]]


def test_scalar_multiplication_non_square():
    a = Matrix(2, 3, [1, 2, 3, 4, 5, 6], dtype=float)
    a *= 0.5
    assert a.tolist() == [[0.5, 1.0, 1.5], [2.0, 2.5, 3.0]]


def test_float_scalar_on_integer_matrix_rejected():
    a = Matrix(2, 2, fill=1)
    with pytest.raises(ElementTypeError):
        a *= 1.5
    assert a == Matrix(2, 2, fill=1)


def test_vector_multiplication_writes_column_zero():
    a = Matrix.from_rows([[1, 2], [3, 4]])
    a *= [1, 1]
    assert a.size() == (2, 2)
    assert a.tolist() == [[3, 2], [7, 4]]


def test_vector_multiplication_length_mismatch():
    a = Matrix(2, 3)
    with pytest.raises(InvalidArgument):
        a *= [1, 2]
    with pytest.raises(InvalidArgument):
        a @ (1, 2, 3, 4)


def test_matmul_vector_returns_column():
    a = Matrix(2, 3, [1, 2, 3, 4, 5, 6])
    col = a @ [1, 0, 1]
    assert col.size() == (2, 1)
    assert col.tolist() == [[4], [10]]
    assert (a @ a.T).tolist() == [[14, 32], [32, 77]]


@pytest.mark.parametrize("n", [0, 1])
def test_power_zero_and_one_are_no_ops(n):
    a = Matrix.from_rows([[1, 2], [3, 4]])
    a.power(n)
    assert a.tolist() == [[1, 2], [3, 4]]
    assert not a.is_reallocated()


def test_power():
    a = Matrix.from_rows([[1, 1], [1, 0]])
    assert (a ^ 10).tolist() == [[89, 55], [55, 34]]
    assert (a ** 3).tolist() == [[3, 2], [2, 1]]
    # the binary forms do not touch the operand
    assert a.tolist() == [[1, 1], [1, 0]]
    a ^= 2
    assert a.tolist() == [[2, 1], [1, 1]]


def test_power_matches_numpy():
    rng = np.random.default_rng(7)
    A = rng.integers(-3, 4, size=(4, 4))
    ours = as_matrix(A).power(5)
    np.testing.assert_array_equal(ours.underlying_array(), np.linalg.matrix_power(A, 5))


def test_power_requires_square():
    with pytest.raises(SizeMismatch):
        Matrix(2, 3).power(2)
    with pytest.raises(InvalidArgument):
        Matrix(2, 2).power(-1)
