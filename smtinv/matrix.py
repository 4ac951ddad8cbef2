# Copyright (C) 2025, Miklos Maroti
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import os
import re
import sys
from typing import List, Optional, Sequence, TextIO, Union

import numpy
from typeguard import typechecked

from .errors import InputError

DECIMAL = re.compile(r"[+-]?[0-9]+")


@typechecked
def read_matrix(path: Union[str, os.PathLike], cols: int) -> List[int]:
    """
    Reads the first cols * cols whitespace separated decimal integers of
    the file as a row-major matrix. Remaining tokens are ignored.
    """

    assert cols >= 1
    path = os.fspath(path)
    try:
        with open(path, encoding="utf-8") as file:
            tokens = file.read().split()
    except (OSError, UnicodeDecodeError) as err:
        raise InputError("cannot read " + path + ": " + str(err)) from err

    count = cols * cols
    if len(tokens) < count:
        raise InputError(path + " has " + str(len(tokens)) +
                         " entries, expected " + str(count))

    result = []
    for token in tokens[:count]:
        if not DECIMAL.fullmatch(token):
            raise InputError("invalid integer " + repr(token) + " in " + path)
        result.append(int(token))
    return result


@typechecked
def mat_mul(cols: int, mod: int, a: Sequence[int],
            b: Sequence[int]) -> List[int]:
    """
    Returns the row-major product of two row-major square matrices with
    every entry reduced into [0, mod).
    """

    assert len(a) == len(b) == cols * cols and mod >= 1
    result = []
    for row in range(cols):
        for col in range(cols):
            total = 0
            for k in range(cols):
                total += a[row * cols + k] * b[k * cols + col]
            result.append(total % mod)
    return result


def identity(cols: int) -> List[int]:
    return [1 if row == col else 0
            for row in range(cols) for col in range(cols)]


def is_identity(cols: int, matrix: Sequence[int]) -> bool:
    return list(matrix) == identity(cols)


def to_grid(cols: int, matrix: Sequence[int]) -> numpy.ndarray:
    assert len(matrix) == cols * cols
    return numpy.array(list(matrix), dtype=object).reshape(cols, cols)


def format_matrix(cols: int, matrix: Sequence[int]) -> str:
    return "\n".join(" ".join(str(v) for v in row)
                     for row in to_grid(cols, matrix))


def report(cols: int, mod: int, a: Sequence[int], b: Sequence[int],
           file: Optional[TextIO] = None) -> List[int]:
    """
    Prints the input matrix, the result and their product modulo `mod`,
    and returns the product which should be the identity matrix.
    """

    if file is None:
        file = sys.stdout

    product = mat_mul(cols, mod, a, b)
    for title, matrix in [("input", a), ("result", b),
                          ("input * result", product)]:
        print("== " + title + " ==", file=file)
        print(format_matrix(cols, matrix), file=file)
        print(file=file)
    return product
