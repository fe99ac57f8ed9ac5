# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import operator
from typing import Any, List

import numpy as np

from .exceptions import ElementTypeError, OutOfRange

EPS: float = 1e-12

# Floating determinants are rounded to this many decimals to hide noise
DET_DECIMALS: int = 5

DEFAULT_DTYPE = np.int64

# Cofactor expansion is O(n!), warn above this order
COFACTOR_WARN_ORDER: int = 8

# numpy dtype kinds accepted as matrix elements: signed, unsigned, float
ARITHMETIC_KINDS = "iuf"


def scale_tol(A: np.ndarray) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    if A.size == 0:
        return EPS
    return EPS * max(1.0, float(np.linalg.norm(A, ord=np.inf)))


def permutation_sign(perm: List[int]) -> int:
    """Return +1 or -1 depending on permutation parity."""
    visited = [False] * len(perm)
    cycles = 0
    for i in range(len(perm)):
        if not visited[i]:
            cycles += 1
            j = i
            while not visited[j]:
                visited[j] = True
                j = perm[j]
    swaps = len(perm) - cycles  # n - #cycles
    return -1 if swaps & 1 else 1


def arithmetic_dtype(dtype: Any) -> np.dtype:
    """
    Normalise ``dtype`` and check it is an arithmetic element type.

    Raises
    ------
    ElementTypeError : bool, complex, object, string and datetime dtypes.
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as e:
        raise ElementTypeError(f"not a numeric element type: {dtype!r}") from e
    if dt.kind not in ARITHMETIC_KINDS:
        raise ElementTypeError(f"element type {dt} is not arithmetic")
    return dt


def is_exact(dtype: np.dtype) -> bool:
    """Integer element types are exact, floating types are not."""
    return np.dtype(dtype).kind in "iu"


def is_scalar(value: Any) -> bool:
    """Python or numpy int/float, excluding bool."""
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
        value, (bool, np.bool_)
    )


def scalar_dtype(value: Any, where: str) -> np.dtype:
    """Smallest dtype holding the scalar ``value``."""
    if not is_scalar(value):
        raise ElementTypeError(f"{where}: {type(value).__name__} is not an arithmetic scalar")
    if isinstance(value, int):
        return np.min_scalar_type(value)
    return np.result_type(value)


def _check_bounds(lo: int, hi: int, dst: np.dtype, where: str) -> None:
    info = np.iinfo(dst)
    if lo < info.min or hi > info.max:
        raise ElementTypeError(
            f"{where}: values in [{lo}, {hi}] do not fit a {dst} matrix "
            f"(range [{info.min}, {info.max}])"
        )


def check_int_range(value: Any, dst: np.dtype, where: str) -> None:
    """Raise ElementTypeError unless ``value`` is a scalar that fits integer ``dst``."""
    scalar_dtype(value, where)
    if isinstance(value, (int, np.integer)):
        _check_bounds(int(value), int(value), np.dtype(dst), where)


def check_castable(src: Any, dst: np.dtype, where: str) -> None:
    """
    Raise ElementTypeError unless values of ``src`` may be stored in a
    ``dst`` buffer without changing kind (float into int is refused).

    ``src`` may be a dtype or a Python/numpy scalar. Integer scalars going
    into an integer buffer are judged by value.
    """
    dst = np.dtype(dst)
    if not isinstance(src, np.dtype) and isinstance(src, (int, np.integer)) and dst.kind in "iu":
        check_int_range(src, dst, where)
        return
    src_dt = src if isinstance(src, np.dtype) else scalar_dtype(src, where)
    if src_dt.kind not in ARITHMETIC_KINDS:
        raise ElementTypeError(f"{where}: element type {src_dt} is not arithmetic")
    if not np.can_cast(src_dt, dst, casting="same_kind"):
        raise ElementTypeError(f"{where}: cannot store {src_dt} values in a {dst} matrix")


def check_values_castable(values: np.ndarray, dst: np.dtype, where: str) -> None:
    """
    Like `check_castable` for a whole array, judged by the values it holds:
    integers must lie inside the range of an integer ``dst``.
    """
    if values.dtype.kind not in ARITHMETIC_KINDS:
        raise ElementTypeError(f"{where}: elements of type {values.dtype} are not arithmetic")
    dst = np.dtype(dst)
    if values.dtype.kind in "iu" and values.size:
        lo, hi = int(values.min()), int(values.max())
        if dst.kind in "iu":
            _check_bounds(lo, hi, dst, where)
            return
        check_castable(np.result_type(np.min_scalar_type(lo), np.min_scalar_type(hi)), dst, where)
        return
    check_castable(values.dtype, dst, where)


def check_index(index: Any, bound: int, what: str) -> int:
    """Return ``index`` as an int, or raise OutOfRange if not in [0, bound)."""
    try:
        i = operator.index(index)
    except TypeError as e:
        raise OutOfRange(f"Matrix: invalid {what} number {index!r}") from e
    if i < 0 or i >= bound:
        raise OutOfRange(f"Matrix: invalid {what} number {i} (size {bound})")
    return i


def random_nonsingular_upper(n, low=-100, high=100, seed=None, dtype=float) -> np.ndarray:
    """
    Build an upper-triangular matrix with random entries above the
    diagonal and only non-zero values on it, so its determinant is the
    product of the diagonal.

    Returns
    -------
    (n, n) ndarray of ``dtype``
    """
    rng = np.random.default_rng(seed)
    if is_exact(dtype):
        U = rng.integers(low, high, size=(n, n))
        diag = rng.integers(1, max(2, high), size=n) * rng.choice([-1, 1], size=n)
    else:
        U = rng.uniform(low, high, size=(n, n))
        diag = rng.uniform(1, max(2, high), size=n) * rng.choice([-1, 1], size=n)
    U = np.triu(U)
    U[np.diag_indices(n)] = diag
    return np.asarray(U, dtype=dtype)
