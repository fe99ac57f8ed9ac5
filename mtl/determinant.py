# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Determinant and diagonality of a square buffer.

Integer buffers use cofactor expansion on Python ints so the result is
exact. Floating buffers go through forward elimination with partial
pivoting and are rounded to ``DET_DECIMALS`` digits.
"""

import logging
from typing import List, Sequence, Union

import numpy as np

from .elimination import forward_eliminate
from .exceptions import SizeMismatch
from .utils import COFACTOR_WARN_ORDER, DET_DECIMALS, is_exact, permutation_sign

logger = logging.getLogger(__name__)


def _require_square(A: np.ndarray, where: str) -> int:
    m, n = A.shape
    if m != n:
        raise SizeMismatch(f"{where}: undefined for non-square {m}x{n} matrix")
    return n


def cofactor_det(A: np.ndarray) -> int:
    """
    Exact determinant of an integer matrix by cofactor expansion along
    the first row.
    """
    n = _require_square(A, "cofactor_det")
    if n > COFACTOR_WARN_ORDER:
        logger.warning("cofactor_det(): expanding a %dx%d matrix – O(n!)", n, n)
    return _expand([[int(x) for x in row] for row in A.tolist()])


def _expand(rows: List[List[int]]) -> int:
    n = len(rows)
    if n == 0:
        return 1
    if n == 1:
        return rows[0][0]
    if n == 2:
        return rows[0][0] * rows[1][1] - rows[0][1] * rows[1][0]

    det = 0
    sign = 1
    for m in range(n):
        if rows[0][m] != 0:
            det += sign * rows[0][m] * _expand(minor(rows, 0, m))
        sign = -sign
    return det


def elimination_det(A: np.ndarray, decimals: int = DET_DECIMALS) -> float:
    """
    Determinant of a floating matrix from its row-echelon form.

    det(A) = sign(perm) * prod(diag(U)); a missing pivot means A is
    singular and the determinant is 0.
    """
    n = _require_square(A, "elimination_det")
    if n == 0:
        return 1.0
    U, pivots, _free, perm = forward_eliminate(A)
    if len(pivots) < n:
        logger.debug("elimination_det(): rank %d < %d, singular", len(pivots), n)
        return 0.0
    sign = permutation_sign(perm)
    det = round(sign * float(np.prod(np.diag(U))), decimals)
    # collapse -0.0
    return det if det != 0 else 0.0


def determinant(A: np.ndarray) -> Union[int, float]:
    """Pick the algorithm from the element type of ``A``."""
    if is_exact(A.dtype):
        return cofactor_det(A)
    return elimination_det(A)


def is_diagonal(A: np.ndarray) -> bool:
    """True iff A is square and every off-diagonal entry is exactly zero."""
    m, n = A.shape
    if m != n:
        return False
    off = A[~np.eye(n, dtype=bool)]
    return not np.any(off != 0)


def minor(rows: Sequence[Sequence], row: int, col: int) -> List[list]:
    """Copy of ``rows`` without ``row`` and ``col``."""
    return [list(r[:col]) + list(r[col + 1 :]) for i, r in enumerate(rows) if i != row]
