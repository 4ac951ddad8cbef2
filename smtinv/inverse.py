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

import logging
from typing import List, Optional, Sequence

from typeguard import typechecked

from .encoder import inverse_constraints
from .errors import DecodeError
from .formulas import Matrix, Cell
from .solver import Solver, Status, Z3Solver
from .translate import translate_all

logger = logging.getLogger(__name__)


class Outcome:
    """
    Result of one inverse search. The matrix is the row-major list of the
    cells of B when the status is `SATISFIABLE`, and `None` otherwise.
    """

    def __init__(self, cols: int, mod: int, status: Status,
                 matrix: Optional[List[int]] = None):
        assert (matrix is not None) == (status is Status.SATISFIABLE)
        self.cols = cols
        self.mod = mod
        self.status = status
        self.matrix = matrix

    @property
    def satisfiable(self) -> bool:
        return self.status is Status.SATISFIABLE

    def __repr__(self) -> str:
        return "Outcome(" + str(self.cols) + "x" + str(self.cols) + \
            " mod " + str(self.mod) + ", " + self.status.value + ", " + \
            repr(self.matrix) + ")"


def decode_model(solver: Solver, cols: int) -> List[int]:
    """
    Reads back the cells of B from the last solution of the solver in
    row-major order.
    """

    result = []
    for row in range(cols):
        for col in range(cols):
            cell = Cell(Matrix.B, col, row)
            value = solver.get_value(solver.variable(cell.name))
            if value is None:
                raise DecodeError("no value for " + cell.name)
            result.append(value)
    return result


@typechecked
def solve_inverse(cols: int, mod: int, values: Sequence[int],
                  solver: Optional[Solver] = None) -> Outcome:
    """
    Searches for a matrix B with A * B = I modulo `mod` where A is given by
    the row-major list of values. The solver must be fresh, a `Z3Solver`
    is created when none is given.
    """

    if solver is None:
        solver = Z3Solver()

    formulas = sorted(inverse_constraints(cols, mod, values), key=str)
    logger.debug("encoded %d constraints for %dx%d matrix modulo %d",
                 len(formulas), cols, cols, mod)

    for constraint in translate_all(solver, formulas):
        solver.ensure(constraint)

    status = solver.solve()
    logger.debug("%s returned %s", solver.signature, status.value)
    if status is not Status.SATISFIABLE:
        return Outcome(cols, mod, status)

    matrix = decode_model(solver, cols)
    logger.debug("decoded %s", matrix)
    return Outcome(cols, mod, status, matrix)
