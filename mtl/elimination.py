# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import List, Tuple

import numpy as np

from .utils import scale_tol

logger = logging.getLogger(__name__)


def forward_eliminate(
    A: np.ndarray,
    pivot: bool = True,
) -> Tuple[np.ndarray, List[int], List[int], List[int]]:
    """
    Row-echelon reduction with partial pivoting on an m by n matrix A.

    Parameters
    ----------
    A : np.ndarray               (m, n)
        Coefficient matrix (MUST be ndarray). Not modified.
    pivot : bool
        If False, the first non-zero entry of a column is used as pivot
        instead of the largest one.

    Returns
    -------
    U      : np.ndarray          (m, n)
        Row-echelon form of A as float64 (upper-trapezoidal, not reduced).
    pivots : list[int]
        Column indices where pivots were placed; len = rank(A).
    free   : list[int]
        Column indices without a pivot.
    perm   : list[int]
        Final row order: row i of U comes from original row perm[i].
    """
    if not isinstance(A, np.ndarray):
        raise TypeError("A must be a NumPy ndarray")

    U = A.astype(float, copy=True)
    m, n = U.shape

    pivot_tol = scale_tol(U)

    perm = list(range(m))  # Identity Permutation
    pivots: List[int] = []
    free: List[int] = []

    row = 0
    for col in range(n):
        if row == m:
            free.extend(range(col, n))
            break
        # Picking the largest magnitude below the current row keeps the
        # multipliers bounded by one.
        col_slice = np.abs(U[row:, col])
        if pivot:
            max_idx = int(col_slice.argmax())
        else:
            nonzero = np.flatnonzero(col_slice > pivot_tol)
            max_idx = int(nonzero[0]) if nonzero.size else 0
        max_val = col_slice[max_idx]

        if max_val <= pivot_tol:  # column is numerically zero
            logger.debug("column %d has no pivot below row %d", col, row)
            free.append(col)
            continue  # go to next column

        pivot_row = row + max_idx

        # Record the swap so callers can recover the permutation parity
        if pivot_row != row:
            U[[row, pivot_row]] = U[[pivot_row, row]]
            perm[row], perm[pivot_row] = perm[pivot_row], perm[row]

        pivots.append(col)

        # Eliminate entries below the pivot
        factors = U[row + 1 :, col] / U[row, col]
        U[row + 1 :, col:] -= factors[:, None] * U[row, col:]

        row += 1  # move to next pivot row

    return U, pivots, free, perm
