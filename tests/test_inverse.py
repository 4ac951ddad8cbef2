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

import pytest

from smtinv import Status, Z3Solver, SearchSolver, DecodeError, solve_inverse
from smtinv.encoder import inverse_constraints
from smtinv.formulas import Matrix, cell_name, evaluate
from smtinv.inverse import Outcome, decode_model
from smtinv.matrix import mat_mul, identity


def check_inverse(cols, mod, matrix, result):
    assert len(result) == cols * cols
    assert all(0 <= v < mod for v in result)
    assert mat_mul(cols, mod, matrix, result) == identity(cols)


def test_one_by_one():
    """
    Since 3 * 2 = 6 = 1 modulo 5, the inverse of [3] is [2].
    """

    outcome = solve_inverse(1, 5, [3])
    assert outcome.status is Status.SATISFIABLE and outcome.satisfiable
    assert outcome.matrix == [2]

    outcome = solve_inverse(1, 5, [3], SearchSolver(0, 5))
    assert outcome.matrix == [2]


def test_three_by_three():
    """
    The determinant of this matrix is 1, so it is invertible modulo 7 and
    the inverse is unique.
    """

    matrix = [1, 2, 3, 0, 1, 4, 5, 6, 0]
    outcome = solve_inverse(3, 7, matrix)
    assert outcome.satisfiable
    assert outcome.matrix == [4, 4, 5, 6, 6, 3, 2, 4, 1]
    check_inverse(3, 7, matrix, outcome.matrix)


def test_composite_modulus():
    """
    Key of a Hill cipher over 26 letters with determinant 9, entries of
    the input need not be canonical residues.
    """

    for matrix in [[3, 3, 2, 5], [-23, 29, 2, -21]]:
        outcome = solve_inverse(2, 26, matrix)
        assert outcome.matrix == [15, 17, 20, 9]
        check_inverse(2, 26, matrix, outcome.matrix)


def test_range():
    for mod in [2, 3, 4, 9]:
        outcome = solve_inverse(2, mod, [1, 1, 0, 1])
        assert outcome.satisfiable
        check_inverse(2, mod, [1, 1, 0, 1], outcome.matrix)
        assert outcome.matrix == [1, mod - 1, 0, 1]


def test_unsatisfiable():
    outcome = solve_inverse(2, 4, [2, 0, 0, 1])
    assert outcome.status is Status.UNSATISFIABLE
    assert outcome.matrix is None and not outcome.satisfiable

    outcome = solve_inverse(2, 7, [1, 2, 2, 4])
    assert outcome.status is Status.UNSATISFIABLE

    outcome = solve_inverse(1, 4, [2], SearchSolver(0, 4))
    assert outcome.status is Status.UNSATISFIABLE


def test_unknown():
    solver = SearchSolver(0, 7, limit=1000)
    outcome = solve_inverse(3, 7, [1, 2, 3, 0, 1, 4, 5, 6, 0], solver)
    assert outcome.status is Status.UNKNOWN
    assert outcome.matrix is None


def test_solution_satisfies_encoding():
    matrix = [2, 1, 1, 1]
    outcome = solve_inverse(2, 11, matrix)
    env = {}
    for idx in range(4):
        env[cell_name(Matrix.A, idx % 2, idx // 2)] = matrix[idx]
        env[cell_name(Matrix.B, idx % 2, idx // 2)] = outcome.matrix[idx]
    assert all(evaluate(f, env) for f in inverse_constraints(2, 11, matrix))


def test_decode_missing_cell():
    """
    A model that does not mention the cells of B cannot be decoded.
    """

    solver = Z3Solver()
    var = solver.variable("x")
    solver.ensure(solver.comp_eq(var, solver.literal(1)))
    assert solver.solve() is Status.SATISFIABLE
    with pytest.raises(DecodeError):
        decode_model(solver, 1)


def test_outcome():
    outcome = Outcome(1, 5, Status.SATISFIABLE, [2])
    assert repr(outcome) == "Outcome(1x1 mod 5, sat, [2])"
    assert not Outcome(1, 5, Status.UNKNOWN).satisfiable


if __name__ == '__main__':
    test_three_by_three()
