# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Owned row-major element buffer behind a Matrix.

A Storage keeps two shapes: the *declared* shape it was created with and
the *logical* shape of the buffer it currently owns. They only diverge
after `reallocate`, which also sets the ``resized`` flag. Everything above
this module reads the logical shape.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from .exceptions import InvalidArgument
from .utils import arithmetic_dtype

logger = logging.getLogger(__name__)


class Storage:
    """
    Single owner of one contiguous ``(rows, cols)`` numpy buffer.

    Attributes
    ----------
    declared : (int, int)
        Shape given at construction, never changed.
    dtype : np.dtype
        Element type of the buffer.
    """

    def __init__(self, rows: int, cols: int, dtype=np.int64) -> None:
        self.declared: Tuple[int, int] = (rows, cols)
        self.dtype: np.dtype = arithmetic_dtype(dtype)
        self._buffer: Optional[np.ndarray] = None
        self._rows = 0
        self._cols = 0
        self._resized = False
        self.allocate(rows, cols)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def allocate(self, rows: int, cols: int) -> None:
        """
        Allocate a zero-filled buffer of shape (rows, cols) and make it the
        logical shape. Any previously owned buffer is dropped first.

        MemoryError from numpy is not caught.
        """
        if rows < 0 or cols < 0:
            raise InvalidArgument(f"Storage: negative shape ({rows}, {cols})")
        self.release()
        self._buffer = np.zeros((rows, cols), dtype=self.dtype)
        self._rows, self._cols = rows, cols

    def release(self) -> None:
        """Drop the buffer. Safe to call repeatedly."""
        if self._buffer is None:
            return
        logger.debug("release %dx%d %s buffer", self._rows, self._cols, self.dtype)
        self._buffer = None
        self._rows = self._cols = 0

    def reallocate(self, rows: int, cols: int) -> None:
        """
        Replace the buffer with a new (rows, cols) one filled with ones and
        mark the storage as resized.
        """
        logger.debug(
            "reallocate %dx%d -> %dx%d", self._rows, self._cols, rows, cols
        )
        self.allocate(rows, cols)
        self.ones()
        self._resized = True

    def ones(self) -> None:
        if self._buffer is not None:
            self._buffer.fill(1)

    def transfer(self) -> "Storage":
        """
        Hand the buffer over to a fresh Storage and leave this one empty.
        """
        other = Storage.__new__(Storage)
        other.declared = self.declared
        other.dtype = self.dtype
        other._buffer = self._buffer
        other._rows, other._cols = self._rows, self._cols
        other._resized = self._resized
        # detach only, the buffer now belongs to `other`
        self._buffer = None
        self._rows = self._cols = 0
        return other

    def copy(self) -> "Storage":
        other = Storage.__new__(Storage)
        other.declared = self.declared
        other.dtype = self.dtype
        other._buffer = None if self._buffer is None else self._buffer.copy()
        other._rows, other._cols = self._rows, self._cols
        other._resized = self._resized
        return other

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    @property
    def buffer(self) -> Optional[np.ndarray]:
        return self._buffer

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def resized(self) -> bool:
        return self._resized

    @property
    def empty(self) -> bool:
        return self._buffer is None

    def get(self, row: int, col: int):
        return self._buffer[row, col]

    def set(self, row: int, col: int, value) -> None:
        self._buffer[row, col] = value

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(declared={self.declared}, "
            f"shape={self.shape}, dtype={self.dtype}, resized={self._resized})"
        )
