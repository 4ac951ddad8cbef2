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
SMTINV computes the inverse of a square integer matrix modulo an integer
by encoding A * B = I as integer constraints and handing them to an SMT
solver.
"""

__version__ = "0.1.0"

from .errors import SmtInvError, InputError, IllTypedFormula, DecodeError
from .formulas import Matrix, Formula, Cell, Const, Zero, One, ZERO, ONE, \
    Sum, Prod, Mod, Eq, Ge, Le, cell_name
from .solver import Status, Solver, Z3Solver, SearchSolver, create_solver
from .inverse import Outcome, solve_inverse

__all__ = [
    "SmtInvError",
    "InputError",
    "IllTypedFormula",
    "DecodeError",
    "Matrix",
    "Formula",
    "Cell",
    "Const",
    "Zero",
    "One",
    "ZERO",
    "ONE",
    "Sum",
    "Prod",
    "Mod",
    "Eq",
    "Ge",
    "Le",
    "cell_name",
    "Status",
    "Solver",
    "Z3Solver",
    "SearchSolver",
    "create_solver",
    "Outcome",
    "solve_inverse",
]
