# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

from mtl import Matrix
from mtl.formatting import format_matrix, format_row


def test_matrix_dump_one_line_per_row():
    m = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    assert str(m) == "1 2 3 \n4 5 6 \n7 8 9 \n"


def test_float_dump():
    m = Matrix(1, 2, [0.5, 2], dtype=float)
    assert str(m) == "0.5 2.0 \n"


def test_empty_dump():
    assert str(Matrix(0, 0)) == ""
    assert format_matrix([]) == ""
    assert format_row([]) == ""


def test_repr_mentions_shape_and_dtype():
    m = Matrix(2, 1, [1, 2], dtype=np.int32)
    assert repr(m) == "Matrix(2, 1, [[1], [2]], dtype=int32)"
