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

from typing import Any, Iterable, List

from .errors import IllTypedFormula
from .formulas import Formula, Cell, Const, Zero, One, Sum, Prod, Mod, \
    Eq, Ge, Le
from .solver import Solver


def translate_int(solver: Solver, formula: Formula) -> Any:
    """
    Lowers an integer valued formula to an integer expression of the
    solver. Cells become solver variables named by `Cell.name`.
    """

    if isinstance(formula, Cell):
        return solver.variable(formula.name)
    elif isinstance(formula, Const):
        return solver.literal(formula.value)
    elif isinstance(formula, (Zero, One)):
        return solver.literal(formula.value)
    elif isinstance(formula, Sum):
        return solver.add_terms([translate_int(solver, t)
                                 for t in formula.terms])
    elif isinstance(formula, Prod):
        return solver.mul(translate_int(solver, formula.left),
                          translate_int(solver, formula.right))
    elif isinstance(formula, Mod):
        return solver.mod(translate_int(solver, formula.lhs),
                          translate_int(solver, formula.rhs))
    else:
        raise IllTypedFormula(
            "ill-typed formula: not an integer term: " + repr(formula))


def translate_bool(solver: Solver, formula: Formula) -> Any:
    """
    Lowers a relation to a boolean expression of the solver.
    """

    if isinstance(formula, Eq):
        return solver.comp_eq(translate_int(solver, formula.left),
                              translate_int(solver, formula.right))
    elif isinstance(formula, Ge):
        return solver.comp_ge(translate_int(solver, formula.left),
                              translate_int(solver, formula.right))
    elif isinstance(formula, Le):
        return solver.comp_le(translate_int(solver, formula.left),
                              translate_int(solver, formula.right))
    else:
        raise IllTypedFormula(
            "ill-typed formula: not a relation: " + repr(formula))


def translate_all(solver: Solver, formulas: Iterable[Formula]) -> List[Any]:
    return [translate_bool(solver, f) for f in formulas]
