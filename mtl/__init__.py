# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
mtl
===

A small dense matrix container: one owned numpy buffer, bounds-checked
element and row access, in-place and value-returning arithmetic, integer
powers, transpose, determinant and row-major iteration.

Public API
~~~~~~~~~~
- Container
    - `Matrix`, `zeros`, `ones`, `identity`, `as_matrix`
- Row access
    - `RowView` (live), `RowSnapshot` (copy)
- Iteration
    - `MatrixIterator`, `ConstMatrixIterator`, `ReverseMatrixIterator`,
      `ConstReverseMatrixIterator`
- Algorithms on raw ndarrays
    - `determinant`, `cofactor_det`, `elimination_det`, `forward_eliminate`
- Errors
    - `MatrixError`, `OutOfRange`, `InvalidArgument`, `SizeMismatch`,
      `ElementTypeError`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import mtl
>>> a = mtl.Matrix(3, 2, [1, 2, 3, 4, 5, 6])
>>> b = mtl.Matrix(2, 3, [1, 2, 3, 4, 5, 6])
>>> (a * b).tolist()
[[9, 12, 15], [19, 26, 33], [29, 40, 51]]
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

from .determinant import cofactor_det, determinant, elimination_det, is_diagonal
from .elimination import forward_eliminate
from .exceptions import (
    ElementTypeError,
    InvalidArgument,
    MatrixError,
    OutOfRange,
    SizeMismatch,
)
from .iterators import (
    ConstMatrixIterator,
    ConstReverseMatrixIterator,
    MatrixIterator,
    ReverseMatrixIterator,
)

# ---------------------------------------------------------------------
# Re-export the names users are expected to touch.
# Each of these is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .matrix import Matrix, as_matrix, identity, ones, zeros
from .storage import Storage
from .utils import DET_DECIMALS, EPS
from .views import RowSnapshot, RowView

__all__ = [
    "Matrix",
    "zeros",
    "ones",
    "identity",
    "as_matrix",
    "Storage",
    "RowView",
    "RowSnapshot",
    "MatrixIterator",
    "ConstMatrixIterator",
    "ReverseMatrixIterator",
    "ConstReverseMatrixIterator",
    "determinant",
    "cofactor_det",
    "elimination_det",
    "is_diagonal",
    "forward_eliminate",
    "MatrixError",
    "OutOfRange",
    "InvalidArgument",
    "SizeMismatch",
    "ElementTypeError",
    "EPS",
    "DET_DECIMALS",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show mtl”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except PackageNotFoundError:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
