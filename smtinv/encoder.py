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

"""
Constraints stating that the unknown matrix B is a modular right inverse
of the known matrix A. Cell(A, k, row) is the entry of A in row `row` and
column `k`, so the product A * B contracts over the column index of A and
the row index of B.
"""

from typing import FrozenSet, Sequence

from typeguard import typechecked

from .formulas import Formula, Matrix, Cell, Const, ZERO, ONE, Sum, Prod, \
    Mod, Eq, Ge, Le


@typechecked
def multiplication_constraints(size: int, mod: int) -> FrozenSet[Formula]:
    """
    Returns the constraints (A * B mod m)[row][col] = I[row][col] for all
    rows and columns of the `size` by `size` identity matrix.
    """

    if size < 1 or mod < 2:
        raise ValueError("invalid size or modulus")

    modulus = Const(mod)
    formulas = set()
    for row in range(size):
        for col in range(size):
            expected = ONE if row == col else ZERO
            total = Sum([Prod(Cell(Matrix.A, k, row), Cell(Matrix.B, col, k))
                         for k in range(size)])
            formulas.add(Eq(Mod(total, modulus), expected))
    return frozenset(formulas)


@typechecked
def cell_range_constraints(cols: int, mod: int) -> FrozenSet[Formula]:
    """
    Returns the constraints 0 <= B[col][row] <= mod - 1 for all cells.
    """

    if cols < 1 or mod < 2:
        raise ValueError("invalid size or modulus")

    upper = Const(mod - 1)
    formulas = set()
    for idx in range(cols * cols):
        cell = Cell(Matrix.B, idx % cols, idx // cols)
        formulas.add(Ge(cell, ZERO))
        formulas.add(Le(cell, upper))
    return frozenset(formulas)


@typechecked
def fix_known_matrix(cols: int, values: Sequence[int]) -> FrozenSet[Formula]:
    """
    Binds the cells of A to the given row-major list of values.
    """

    if cols < 1 or len(values) != cols * cols:
        raise ValueError("expected " + str(cols * cols) + " values")

    formulas = set()
    for idx, value in enumerate(values):
        cell = Cell(Matrix.A, idx % cols, idx // cols)
        formulas.add(Eq(cell, Const(value)))
    return frozenset(formulas)


@typechecked
def inverse_constraints(cols: int, mod: int,
                        values: Sequence[int]) -> FrozenSet[Formula]:
    """
    Returns all constraints of the inverse problem for the given matrix.
    The identity is encoded at dimension `cols`. Earlier versions always
    encoded a 3 by 3 identity, use `multiplication_constraints(3, mod)`
    to rebuild that encoding.
    """

    return multiplication_constraints(cols, mod) \
        | cell_range_constraints(cols, mod) \
        | fix_known_matrix(cols, values)
