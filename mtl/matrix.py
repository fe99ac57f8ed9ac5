# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense, fixed-element-type matrix container.

A Matrix is created with a declared shape and an element type. The shape it
actually has (its logical shape) only changes through `resize` or matrix
multiplication, which reallocate the buffer; from then on
``is_reallocated()`` is True. All bounds checks and arithmetic use the
logical shape.

Example
-------
>>> from mtl import Matrix
>>> a = Matrix.from_rows([[1, 2], [3, 4]])
>>> print(a * a)
7 10
15 22
<BLANKLINE>
>>> a.determinant()
-2
"""

import logging
import operator
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np

from .determinant import determinant as _determinant
from .determinant import is_diagonal as _is_diagonal
from .exceptions import InvalidArgument, SizeMismatch
from .formatting import format_matrix, format_repr
from .iterators import (
    ConstMatrixIterator,
    ConstReverseMatrixIterator,
    MatrixIterator,
    ReverseMatrixIterator,
)
from .storage import Storage
from .utils import (
    DEFAULT_DTYPE,
    arithmetic_dtype,
    check_castable,
    check_values_castable,
    check_index,
    check_int_range,
    is_exact,
    is_scalar,
    scalar_dtype,
)
from .views import RowSnapshot, RowView

logger = logging.getLogger(__name__)

_VECTOR_TYPES = (list, tuple, np.ndarray)


def _shape_arg(value: Any, what: str) -> int:
    try:
        n = operator.index(value)
    except TypeError as e:
        raise InvalidArgument(f"Matrix: {what} must be an integer, got {value!r}") from e
    if n < 0:
        raise InvalidArgument(f"Matrix: {what} must be non-negative, got {n}")
    return n


def _flatten(values: Any) -> List:
    """
    Flatten a flat or nested (list of rows) initializer into one row-major
    list. Mixing scalars and rows is refused.
    """
    if isinstance(values, np.ndarray):
        return values.ravel().tolist()
    if not isinstance(values, (list, tuple)):
        raise InvalidArgument(
            f"Matrix.assign: expected a list of elements, got {type(values).__name__}"
        )
    nested = [isinstance(v, _VECTOR_TYPES) for v in values]
    if all(nested) and values:
        flat: List = []
        for row in values:
            flat.extend(np.asarray(row).ravel().tolist())
        return flat
    if any(nested):
        raise InvalidArgument("Matrix.assign: cannot mix rows and scalar elements")
    return list(values)


class Matrix:
    """
    Owned two-dimensional buffer of arithmetic elements.

    Parameters
    ----------
    rows, cols : int
        Declared shape.
    values : sequence, optional
        Row-major elements, either flat (``rows * cols`` scalars) or nested
        (a list of rows holding ``rows * cols`` scalars in total).
    fill : scalar, optional
        Value every cell is set to, cast to ``dtype``. Mutually exclusive
        with ``values``.
    dtype : numpy dtype
        Integer or floating element type, ``int64`` by default.

    Raises
    ------
    InvalidArgument : wrong number of initial values or negative shape.
    ElementTypeError : non-arithmetic dtype, or values that do not fit it.
    """

    __hash__ = None

    def __init__(
        self,
        rows: int,
        cols: int,
        values: Optional[Sequence] = None,
        *,
        fill: Any = None,
        dtype=DEFAULT_DTYPE,
    ) -> None:
        self._storage = Storage(_shape_arg(rows, "rows"), _shape_arg(cols, "cols"), dtype)
        if values is not None and fill is not None:
            raise InvalidArgument("Matrix: pass either values or fill, not both")
        if fill is not None:
            if is_exact(self.dtype):
                check_int_range(fill, self.dtype, "Matrix.__init__")
            else:
                scalar_dtype(fill, "Matrix.__init__")
            # explicit cast, a float fill truncates into an integer matrix
            self._storage.buffer[...] = fill
        elif values is not None:
            self.assign(values)

    # ------------------------------------------------------------------
    # alternative constructors
    # ------------------------------------------------------------------
    @classmethod
    def full(cls, rows: int, cols: int, value, dtype=DEFAULT_DTYPE) -> "Matrix":
        return cls(rows, cols, fill=value, dtype=dtype)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence], dtype=None) -> "Matrix":
        """
        Build a matrix whose declared shape is taken from a rectangular
        nested list. The element type is inferred unless ``dtype`` is given.
        """
        if not isinstance(rows, _VECTOR_TYPES) or not all(
            isinstance(r, _VECTOR_TYPES) for r in rows
        ):
            raise InvalidArgument("Matrix.from_rows: expected a list of rows")
        n_rows = len(rows)
        n_cols = len(rows[0]) if n_rows else 0
        if any(len(r) != n_cols for r in rows):
            raise InvalidArgument("Matrix.from_rows: rows have different lengths")
        if dtype is None:
            dtype = np.asarray(rows).dtype if n_rows and n_cols else DEFAULT_DTYPE
            if dtype.kind == "b":
                dtype = DEFAULT_DTYPE
        return cls(n_rows, n_cols, rows if n_rows and n_cols else None, dtype=dtype)

    @classmethod
    def from_matrix(cls, matrix: "Matrix") -> "Matrix":
        return matrix.copy()

    def assign(self, values: Sequence) -> "Matrix":
        """
        Refill the matrix from a flat or nested list in row-major order.

        The buffer is set to ones before the element count is checked, so on
        InvalidArgument the matrix is left all ones rather than half written.
        """
        self._storage.ones()
        flat = _flatten(values)
        rows, cols = self.size()
        if len(flat) != rows * cols:
            raise InvalidArgument(
                "Matrix.assign: cannot initialize matrix with incorrect "
                f"number of elements (expected {rows * cols}, got {len(flat)})"
            )
        if not flat:
            return self
        arr = np.asarray(flat)
        check_values_castable(arr, self.dtype, "Matrix.assign")
        self._storage.buffer[...] = arr.reshape(rows, cols)
        return self

    # ------------------------------------------------------------------
    # ownership
    # ------------------------------------------------------------------
    def copy(self) -> "Matrix":
        """Deep copy with its own buffer."""
        out = Matrix.__new__(Matrix)
        out._storage = self._storage.copy()
        return out

    def __copy__(self) -> "Matrix":
        return self.copy()

    def __deepcopy__(self, memo) -> "Matrix":
        return self.copy()

    def move(self) -> "Matrix":
        """
        Return a new Matrix that takes over this one's buffer and shape.

        Afterwards this matrix is empty: ``size() == (0, 0)`` and
        ``underlying_array() is None``.
        """
        out = Matrix.__new__(Matrix)
        out._storage = self._storage.transfer()
        return out

    def convert(self, rows: int, cols: int, dtype=None) -> "Matrix":
        """
        Copy into a matrix of declared shape (rows, cols), which must be at
        least as large as the current shape. New cells are zero. ``dtype``
        casts the elements explicitly.
        """
        rows, cols = _shape_arg(rows, "rows"), _shape_arg(cols, "cols")
        r, c = self.size()
        if rows < r or cols < c:
            raise SizeMismatch(
                f"Matrix.convert: cannot shrink {r}x{c} into {rows}x{cols}"
            )
        out = Matrix(rows, cols, dtype=self.dtype if dtype is None else dtype)
        if r and c:
            out._storage.buffer[:r, :c] = self._storage.buffer
        return out

    def resize(self, rows: int, cols: int) -> "Matrix":
        """Reallocate to (rows, cols); every cell becomes 1."""
        self._storage.reallocate(_shape_arg(rows, "rows"), _shape_arg(cols, "cols"))
        return self

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def size(self) -> Tuple[int, int]:
        return self._storage.shape

    def row_size(self) -> int:
        return self._storage.rows

    def col_size(self) -> int:
        return self._storage.cols

    def declared_size(self) -> Tuple[int, int]:
        return self._storage.declared

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    def is_reallocated(self) -> bool:
        return self._storage.resized

    def underlying_array(self) -> Optional[np.ndarray]:
        """The live buffer (not a copy), or None once moved from."""
        return self._storage.buffer

    def tolist(self) -> List[list]:
        return self._array().tolist()

    def _array(self) -> np.ndarray:
        buf = self._storage.buffer
        return np.empty((0, 0), dtype=self.dtype) if buf is None else buf

    def __array__(self, dtype=None, copy=None):
        arr = self._array()
        return arr.astype(dtype if dtype is not None else arr.dtype, copy=True)

    # ------------------------------------------------------------------
    # element access
    # ------------------------------------------------------------------
    def _check(self, row, col) -> Tuple[int, int]:
        r, c = self.size()
        return check_index(row, r, "row"), check_index(col, c, "col")

    def at(self, row: int, col: int):
        i, j = self._check(row, col)
        return self._storage.get(i, j)

    def __call__(self, row: int, col: int):
        return self.at(row, col)

    def set(self, row: int, col: int, value) -> None:
        i, j = self._check(row, col)
        check_castable(value, self.dtype, "Matrix.set")
        self._storage.set(i, j, value)

    def row(self, row: int) -> RowView:
        return RowView(self, check_index(row, self.row_size(), "row"))

    def crow(self, row: int) -> RowSnapshot:
        i = check_index(row, self.row_size(), "row")
        return RowSnapshot(self._storage.buffer[i].tolist(), i)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise InvalidArgument(f"Matrix: expected (row, col), got {key!r}")
            return self.at(*key)
        return self.row(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise InvalidArgument(f"Matrix: expected (row, col), got {key!r}")
            self.set(key[0], key[1], value)
        else:
            self.row(key).assign(value)

    # ------------------------------------------------------------------
    # whole-matrix mutation
    # ------------------------------------------------------------------
    def insert(self, element) -> "Matrix":
        """Set every element to ``element``."""
        it = self.begin()
        end = self.end()
        while it != end:
            it.store(element)
            it.advance()
        return self

    def sort(self) -> "Matrix":
        """Sort all elements ascending in row-major order."""
        buf = self._storage.buffer
        if buf is not None and buf.size:
            buf[...] = np.sort(buf, axis=None).reshape(buf.shape)
        return self

    # ------------------------------------------------------------------
    # linear algebra
    # ------------------------------------------------------------------
    def transpose(self) -> "Matrix":
        r, c = self.size()
        out = Matrix(c, r, dtype=self.dtype)
        if r and c:
            out._storage.buffer[...] = self._storage.buffer.T
        return out

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def determinant(self) -> Union[int, float]:
        """
        Exact cofactor expansion for integer matrices, pivoted elimination
        rounded to ``DET_DECIMALS`` digits for floating ones.

        Raises
        ------
        SizeMismatch : if the matrix is not square.
        """
        return _determinant(self._array())

    det = determinant

    def is_diagonal(self) -> bool:
        return _is_diagonal(self._array())

    def power(self, n: int) -> "Matrix":
        """Multiply the matrix by itself ``n - 1`` times, in place."""
        try:
            n = operator.index(n)
        except TypeError as e:
            raise InvalidArgument(f"Matrix.power: exponent must be an integer, got {n!r}") from e
        if n < 0:
            raise InvalidArgument(f"Matrix.power: negative exponent {n}")
        r, c = self.size()
        if r != c:
            raise SizeMismatch(f"Matrix.power: undefined for non-square {r}x{c} matrix")
        if n <= 1:
            return self
        logger.debug("power(%d) of a %dx%d %s matrix", n, r, c, self.dtype)
        base = self.copy()
        for _ in range(n - 1):
            self._multiply_matrix(base, "Matrix.power")
        return self

    # ------------------------------------------------------------------
    # arithmetic, in place
    # ------------------------------------------------------------------
    def _check_same_shape(self, other: "Matrix", where: str) -> None:
        if self.size() != other.size():
            raise SizeMismatch(
                f"{where}: shapes {self.size()} and {other.size()} differ"
            )
        check_castable(other.dtype, self.dtype, where)

    def __iadd__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "Matrix.__iadd__")
        if self._storage.buffer is not None:
            np.add(self._storage.buffer, other._array(), out=self._storage.buffer, casting="same_kind")
        return self

    def __isub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "Matrix.__isub__")
        if self._storage.buffer is not None:
            np.subtract(self._storage.buffer, other._array(), out=self._storage.buffer, casting="same_kind")
        return self

    def _multiply_matrix(self, other: "Matrix", where: str) -> None:
        r, k = self.size()
        k2, c = other.size()
        if k != k2:
            raise SizeMismatch(
                f"{where}: cannot multiply {r}x{k} by {k2}x{c}"
            )
        check_castable(other.dtype, self.dtype, where)
        product = self._array() @ other._array()
        self._storage.reallocate(r, c)
        self._storage.buffer[...] = product

    def _multiply_scalar(self, scalar) -> None:
        check_castable(scalar, self.dtype, "Matrix.__imul__")
        if self._storage.buffer is not None:
            np.multiply(self._storage.buffer, scalar, out=self._storage.buffer, casting="same_kind")

    def _vector(self, vector, where: str) -> np.ndarray:
        vec = np.asarray(vector)
        cols = self.col_size()
        if vec.ndim != 1 or vec.shape[0] != cols:
            raise InvalidArgument(
                f"{where}: invalid vector size {vec.shape}, expected ({cols},)"
            )
        if cols:
            check_values_castable(vec, self.dtype, where)
        return vec

    def _multiply_vector(self, vector) -> None:
        # the product lands in column 0, the shape is left alone
        vec = self._vector(vector, "Matrix.__imul__")
        buf = self._storage.buffer
        if buf is not None and buf.size:
            buf[:, 0] = buf @ vec

    def __imul__(self, other):
        if isinstance(other, Matrix):
            self._multiply_matrix(other, "Matrix.__imul__")
        elif is_scalar(other):
            self._multiply_scalar(other)
        elif isinstance(other, _VECTOR_TYPES):
            self._multiply_vector(other)
        else:
            return NotImplemented
        return self

    def __ixor__(self, n):
        return self.power(n)

    __ipow__ = __ixor__

    # ------------------------------------------------------------------
    # arithmetic, value returning
    # ------------------------------------------------------------------
    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        out = self.copy()
        out += other
        return out

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        out = self.copy()
        out -= other
        return out

    def __mul__(self, other):
        return self.copy().__imul__(other)

    def __rmul__(self, other):
        if not is_scalar(other):
            return NotImplemented
        return self * other

    def __matmul__(self, other):
        """
        ``m @ other`` is the matrix product; ``m @ vector`` returns a
        proper ``(rows, 1)`` column matrix.
        """
        if isinstance(other, Matrix):
            out = self.copy()
            out._multiply_matrix(other, "Matrix.__matmul__")
            return out
        if isinstance(other, _VECTOR_TYPES):
            vec = self._vector(other, "Matrix.__matmul__")
            out = Matrix(self.row_size(), 1, dtype=self.dtype)
            if self.row_size() and vec.size:
                out._storage.buffer[:, 0] = self._storage.buffer @ vec
            return out
        return NotImplemented

    def __xor__(self, n):
        return self.copy().power(n)

    __pow__ = __xor__

    # ------------------------------------------------------------------
    # comparison
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size() != other.size():
            return False
        return bool(np.array_equal(self._array(), other._array()))

    def __ne__(self, other) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    # ------------------------------------------------------------------
    # iteration
    # ------------------------------------------------------------------
    def _first(self) -> Tuple[int, int]:
        r, c = self.size()
        return (0, 0) if r and c else (r, 0)

    def begin(self) -> MatrixIterator:
        return MatrixIterator(self, *self._first())

    def end(self) -> MatrixIterator:
        return MatrixIterator(self, self.row_size(), 0)

    def cbegin(self) -> ConstMatrixIterator:
        return ConstMatrixIterator(self, *self._first())

    def cend(self) -> ConstMatrixIterator:
        return ConstMatrixIterator(self, self.row_size(), 0)

    def rbegin(self) -> ReverseMatrixIterator:
        r, c = self.size()
        if r and c:
            return ReverseMatrixIterator(self, r - 1, c - 1)
        return self.rend()

    def rend(self) -> ReverseMatrixIterator:
        return ReverseMatrixIterator(self, -1, 0)

    def crbegin(self) -> ConstReverseMatrixIterator:
        r, c = self.size()
        if r and c:
            return ConstReverseMatrixIterator(self, r - 1, c - 1)
        return self.crend()

    def crend(self) -> ConstReverseMatrixIterator:
        return ConstReverseMatrixIterator(self, -1, 0)

    def __iter__(self) -> MatrixIterator:
        return self.begin()

    def __reversed__(self) -> ReverseMatrixIterator:
        return self.rbegin()

    # ------------------------------------------------------------------
    # formatting
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return format_matrix(self.tolist())

    def __repr__(self) -> str:
        return format_repr(self.__class__.__name__, self.tolist(), self.dtype, self.size())


def zeros(rows: int, cols: int, dtype=DEFAULT_DTYPE) -> Matrix:
    return Matrix(rows, cols, dtype=dtype)


def ones(rows: int, cols: int, dtype=DEFAULT_DTYPE) -> Matrix:
    return Matrix(rows, cols, fill=1, dtype=dtype)


def identity(n: int, dtype=DEFAULT_DTYPE) -> Matrix:
    out = Matrix(n, n, dtype=dtype)
    if n:
        np.fill_diagonal(out.underlying_array(), 1)
    return out


def as_matrix(data: Any, dtype=None) -> Matrix:
    """Wrap a nested list, 2-D ndarray or Matrix (copied) as a Matrix."""
    if isinstance(data, Matrix):
        return data.copy() if dtype is None else data.convert(*data.size(), dtype=dtype)
    arr = np.asarray(data)
    if arr.ndim != 2:
        raise InvalidArgument(f"as_matrix: expected 2-D data, got {arr.ndim}-D")
    dt = arithmetic_dtype(arr.dtype if dtype is None else dtype)
    return Matrix(arr.shape[0], arr.shape[1], arr if arr.size else None, dtype=dt)
