# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Human-readable dumps of matrices and rows.

Each element is followed by one space and each matrix row ends with a
newline. The output is meant for eyes and logs, not for parsing back.
"""

from typing import Iterable, List

import numpy as np


def format_row(values: Iterable) -> str:
    return "".join(f"{v} " for v in values)


def format_matrix(rows: List[list]) -> str:
    return "".join(format_row(row) + "\n" for row in rows)


def format_repr(name: str, rows: List[list], dtype: np.dtype, shape) -> str:
    r, c = shape
    return f"{name}({r}, {c}, {rows!r}, dtype={dtype.name})"
