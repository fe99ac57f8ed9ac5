# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by the matrix container.

Each class also derives from the builtin a plain NumPy routine would raise
for the same mistake, so ``except ValueError`` and friends keep working.
"""


class MatrixError(Exception):
    """Base class for every error raised by mtl."""


class OutOfRange(MatrixError, IndexError):
    """Row or column index outside the logical shape."""


class InvalidArgument(MatrixError, ValueError):
    """Malformed input: wrong element count, row length or vector length."""


class SizeMismatch(MatrixError, ValueError):
    """Operand shapes are incompatible for the requested operation."""


class ElementTypeError(MatrixError, TypeError):
    """Element type is not arithmetic or cannot be cast to the matrix dtype."""
