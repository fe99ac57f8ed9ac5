# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from mtl.elimination import forward_eliminate
from mtl.utils import EPS, permutation_sign, random_nonsingular_upper

TEST_ITERATIONS = 50
logger = logging.getLogger(__name__)


def test_forward_eliminate_is_upper_triangular():
    rng = np.random.default_rng(3)
    A = rng.standard_normal((20, 20))
    U, pivots, free, perm = forward_eliminate(A)
    assert np.allclose(np.tril(U, -1), 0.0, atol=1e-10)
    assert pivots == list(range(20))
    assert free == []
    assert sorted(perm) == list(range(20))


def test_forward_eliminate_does_not_modify_input():
    A = np.array([[0.0, 1.0], [2.0, 3.0]])
    before = A.copy()
    forward_eliminate(A)
    np.testing.assert_array_equal(A, before)


def test_permutation_reproduces_pa_equals_lu_upper_part():
    rng = np.random.default_rng(4)
    for _ in range(TEST_ITERATIONS):
        A = rng.standard_normal((5, 5))
        U, _pivots, _free, perm = forward_eliminate(A)
        logger.debug(f"\nperm={perm}\nU=\n{U}")
        # det(PA) == prod(diag(U)), det(P) == parity of perm
        det = permutation_sign(perm) * np.prod(np.diag(U))
        np.testing.assert_allclose(det, np.linalg.det(A), rtol=1e-8, atol=EPS)


def test_rank_deficient_columns_are_free():
    A = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 7.0]])
    U, pivots, free, perm = forward_eliminate(A)
    assert pivots == [0, 2]
    assert free == [1]


def test_upper_triangular_needs_no_swaps():
    U0 = random_nonsingular_upper(6, seed=11)
    _U, pivots, _free, perm = forward_eliminate(U0)
    assert perm == list(range(6))
    assert len(pivots) == 6


def test_without_pivoting_keeps_first_nonzero_row():
    A = np.array([[1.0, 2.0], [10.0, 3.0]])
    _U, _pivots, _free, perm = forward_eliminate(A, pivot=False)
    assert perm == [0, 1]
    _U, _pivots, _free, perm = forward_eliminate(A, pivot=True)
    assert perm == [1, 0]


@pytest.mark.parametrize("perm,sign", [([0, 1, 2], 1), ([1, 0, 2], -1), ([1, 2, 0], 1)])
def test_permutation_sign(perm, sign):
    assert permutation_sign(perm) == sign


def test_forward_eliminate_rejects_lists():
    with pytest.raises(TypeError):
        forward_eliminate([[1.0, 2.0], [3.0, 4.0]])
