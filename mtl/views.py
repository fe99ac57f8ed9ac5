# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Row accessors returned by ``Matrix.__getitem__`` and ``Matrix.crow``.

RowView
    Live cursor on one row. Every read and write goes to the matrix buffer,
    so it never goes stale. Only valid while the matrix is not resized.
RowSnapshot
    Immutable copy of a row taken at creation. Safe to keep around.
"""

from typing import TYPE_CHECKING, Iterator, Sequence, Tuple

import numpy as np

from .exceptions import InvalidArgument
from .formatting import format_row
from .utils import check_index, check_values_castable

if TYPE_CHECKING:
    from .matrix import Matrix


def _as_values(other) -> Tuple:
    if isinstance(other, (RowView, RowSnapshot)):
        return tuple(other.tolist())
    if isinstance(other, np.ndarray):
        return tuple(other.tolist())
    return tuple(other)


class RowView:
    """Bounds-checked read/write access to row ``row`` of ``matrix``."""

    def __init__(self, matrix: "Matrix", row: int) -> None:
        self._matrix = matrix
        self._row = row

    @property
    def row(self) -> int:
        return self._row

    def __len__(self) -> int:
        return self._matrix.col_size()

    def __getitem__(self, col: int):
        return self._matrix.at(self._row, col)

    def __setitem__(self, col: int, value) -> None:
        self._matrix.set(self._row, col, value)

    def __iter__(self) -> Iterator:
        return iter(self.tolist())

    def assign(self, values: Sequence) -> "RowView":
        """
        Overwrite the whole row. ``values`` must have exactly ``col_size()``
        elements; nothing is written otherwise.
        """
        values = np.asarray(values)
        cols = self._matrix.col_size()
        if values.ndim != 1 or values.shape[0] != cols:
            raise InvalidArgument(
                f"Row.assign: expected {cols} values, got shape {values.shape}"
            )
        check_index(self._row, self._matrix.row_size(), "row")
        if cols:
            check_values_castable(values, self._matrix.dtype, "Row.assign")
            self._matrix.underlying_array()[self._row, :] = values
        return self

    def tolist(self) -> list:
        # the matrix may have been resized since the view was made
        check_index(self._row, self._matrix.row_size(), "row")
        return self._matrix.underlying_array()[self._row].tolist()

    def snapshot(self) -> "RowSnapshot":
        return RowSnapshot(self.tolist(), self._row)

    def __eq__(self, other) -> bool:
        if isinstance(other, (RowView, RowSnapshot, list, tuple, np.ndarray)):
            return tuple(self.tolist()) == _as_values(other)
        return NotImplemented

    __hash__ = None

    def __str__(self) -> str:
        return format_row(self.tolist())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(row={self._row}, {self.tolist()!r})"


class RowSnapshot:
    """Read-only copy of one matrix row."""

    def __init__(self, values: Sequence, row: int) -> None:
        self._values = tuple(values)
        self._row = row

    @property
    def row(self) -> int:
        return self._row

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, col: int):
        return self._values[check_index(col, len(self._values), "col")]

    def __iter__(self) -> Iterator:
        return iter(self._values)

    def tolist(self) -> list:
        return list(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, (RowView, RowSnapshot, list, tuple, np.ndarray)):
            return self._values == _as_values(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._values)

    def __str__(self) -> str:
        return format_row(self._values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(row={self._row}, {list(self._values)!r})"
