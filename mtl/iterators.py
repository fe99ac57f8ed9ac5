# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Row-major cursors over a Matrix.

A cursor is a (row, col) position bound to one matrix. It works both as a
Python iterator (``for x in m``, ``sum(m)``, ``functools.reduce``) and as
an explicit cursor compared against ``m.end()``:

>>> it = m.begin()
>>> while it != m.end():
...     it.store(it.value * 2)
...     it.advance()

The end position of the forward cursors is ``(rows, 0)``. Cursors do not
own the matrix; they are invalid once it is resized.
"""

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .matrix import Matrix


class ConstMatrixIterator:
    """Read-only forward cursor."""

    def __init__(self, matrix: "Matrix", row: int, col: int) -> None:
        self._matrix = matrix
        self._row = row
        self._col = col

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def position(self) -> Tuple[int, int]:
        return (self._row, self._col)

    @property
    def value(self):
        """Element under the cursor; OutOfRange past the last element."""
        return self._matrix.at(self._row, self._col)

    def exhausted(self) -> bool:
        return self._row >= self._matrix.row_size() or self._matrix.col_size() == 0

    def advance(self):
        if self._col < self._matrix.col_size() - 1:
            self._col += 1
        else:
            self._row += 1
            self._col = 0
        return self

    def __iter__(self):
        return self

    def __next__(self):
        if self.exhausted():
            raise StopIteration
        value = self.value
        self.advance()
        return value

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConstMatrixIterator):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._matrix is other._matrix
            and self._row == other._row
            and self._col == other._col
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(row={self._row}, col={self._col})"


class MatrixIterator(ConstMatrixIterator):
    """Forward cursor that can also write the element under it."""

    def store(self, value) -> None:
        self._matrix.set(self._row, self._col, value)


class ConstReverseMatrixIterator(ConstMatrixIterator):
    """
    Read-only cursor walking row-major order backwards, from the last
    element to the ``(-1, 0)`` end position.
    """

    def exhausted(self) -> bool:
        return self._row < 0 or self._matrix.col_size() == 0

    def advance(self):
        if self._col > 0:
            self._col -= 1
        else:
            self._row -= 1
            self._col = self._matrix.col_size() - 1 if self._row >= 0 else 0
        return self


class ReverseMatrixIterator(ConstReverseMatrixIterator):
    """Backward cursor that can also write the element under it."""

    def store(self, value) -> None:
        self._matrix.set(self._row, self._col, value)
