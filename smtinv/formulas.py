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
Immutable formula trees over the cells of two square matrices. Integer
valued nodes are cells, constants, sums, products and modulo, boolean
valued nodes are the equality and order relations between them.
"""

import enum
from typing import Dict, FrozenSet, Sequence, Tuple, Union

from typeguard import typechecked

from .errors import IllTypedFormula


class Matrix(enum.Enum):
    A = "A"
    B = "B"

    def __str__(self) -> str:
        return self.value


@typechecked
def cell_name(matrix: Matrix, col: int, row: int) -> str:
    """
    Returns the name of the solver variable holding the given cell, like
    `A[0][2]` for column 0 and row 2 of the known matrix. This is the only
    place where variable names are made.
    """
    return str(matrix) + "[" + str(col) + "][" + str(row) + "]"


class Sort:
    def __init__(self, name: str):
        self.name = name

    def __str__(self) -> str:
        return self.name


INTEGER = Sort("integer")
BOOLEAN = Sort("boolean")


class Formula:
    """
    Base class of all formula nodes. The node kind and the tuple of its
    arguments determine equality and hashing, so structurally equal trees
    are interchangeable and can be collected into sets.
    """

    def __init__(self, sort: Sort, *args):
        object.__setattr__(self, "sort", sort)
        object.__setattr__(self, "args", args)

    def __setattr__(self, name, value):
        raise AttributeError("formulas are immutable")

    def __delattr__(self, name):
        raise AttributeError("formulas are immutable")

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.args == other.args

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.args))

    @property
    def subformulas(self) -> Tuple['Formula', ...]:
        return tuple(a for a in self.args if isinstance(a, Formula))

    @property
    def cells(self) -> FrozenSet['Cell']:
        result = set()
        for sub in self.subformulas:
            result.update(sub.cells)
        return frozenset(result)

    def __repr__(self) -> str:
        return type(self).__name__ + "(" + \
            ", ".join(repr(a) for a in self.args) + ")"

    def __str__(self) -> str:
        raise NotImplementedError()


def _integer(term: Formula) -> Formula:
    if not isinstance(term, Formula) or term.sort is not INTEGER:
        raise IllTypedFormula(
            "ill-typed formula: expected integer term, got " + repr(term))
    return term


class Cell(Formula):
    @typechecked
    def __init__(self, matrix: Matrix, col: int, row: int):
        assert col >= 0 and row >= 0
        Formula.__init__(self, INTEGER, matrix, col, row)

    @property
    def matrix(self) -> Matrix:
        return self.args[0]

    @property
    def col(self) -> int:
        return self.args[1]

    @property
    def row(self) -> int:
        return self.args[2]

    @property
    def name(self) -> str:
        return cell_name(self.matrix, self.col, self.row)

    @property
    def cells(self) -> FrozenSet['Cell']:
        return frozenset((self,))

    def __str__(self) -> str:
        return self.name


class Const(Formula):
    @typechecked
    def __init__(self, n: int):
        Formula.__init__(self, INTEGER, n)

    @property
    def value(self) -> int:
        return self.args[0]

    def __str__(self) -> str:
        return str(self.value)


class Zero(Formula):
    def __init__(self):
        Formula.__init__(self, INTEGER)

    @property
    def value(self) -> int:
        return 0

    def __str__(self) -> str:
        return "0"


class One(Formula):
    def __init__(self):
        Formula.__init__(self, INTEGER)

    @property
    def value(self) -> int:
        return 1

    def __str__(self) -> str:
        return "1"


ZERO = Zero()
ONE = One()


class Sum(Formula):
    @typechecked
    def __init__(self, terms: Sequence[Formula]):
        if not terms:
            raise ValueError("empty sum")
        Formula.__init__(self, INTEGER, *(_integer(t) for t in terms))

    @property
    def terms(self) -> Tuple[Formula, ...]:
        return self.args

    def __str__(self) -> str:
        return " + ".join(str(t) for t in self.terms)


class Prod(Formula):
    @typechecked
    def __init__(self, left: Formula, right: Formula):
        Formula.__init__(self, INTEGER, _integer(left), _integer(right))

    @property
    def left(self) -> Formula:
        return self.args[0]

    @property
    def right(self) -> Formula:
        return self.args[1]

    def __str__(self) -> str:
        return str(self.left) + " * " + str(self.right)


class Mod(Formula):
    @typechecked
    def __init__(self, lhs: Formula, rhs: Formula):
        Formula.__init__(self, INTEGER, _integer(lhs), _integer(rhs))

    @property
    def lhs(self) -> Formula:
        return self.args[0]

    @property
    def rhs(self) -> Formula:
        return self.args[1]

    def __str__(self) -> str:
        return "(" + str(self.lhs) + ") mod " + str(self.rhs)


class Relation(Formula):
    symbol: str = "?"

    @typechecked
    def __init__(self, left: Formula, right: Formula):
        Formula.__init__(self, BOOLEAN, _integer(left), _integer(right))

    @property
    def left(self) -> Formula:
        return self.args[0]

    @property
    def right(self) -> Formula:
        return self.args[1]

    def __str__(self) -> str:
        return str(self.left) + " " + self.symbol + " " + str(self.right)


class Eq(Relation):
    symbol = "="


class Ge(Relation):
    symbol = ">="


class Le(Relation):
    symbol = "<="


def evaluate(formula: Formula, env: Dict[str, int]) -> Union[int, bool]:
    """
    Evaluates the formula with the cell values taken from the given
    dictionary keyed by cell name. Integer terms evaluate to an `int`,
    relations to a `bool`.
    """

    if isinstance(formula, Cell):
        return env[formula.name]
    elif isinstance(formula, (Const, Zero, One)):
        return formula.value
    elif isinstance(formula, Sum):
        return sum(evaluate(t, env) for t in formula.terms)
    elif isinstance(formula, Prod):
        return evaluate(formula.left, env) * evaluate(formula.right, env)
    elif isinstance(formula, Mod):
        return evaluate(formula.lhs, env) % evaluate(formula.rhs, env)
    elif isinstance(formula, Eq):
        return evaluate(formula.left, env) == evaluate(formula.right, env)
    elif isinstance(formula, Ge):
        return evaluate(formula.left, env) >= evaluate(formula.right, env)
    elif isinstance(formula, Le):
        return evaluate(formula.left, env) <= evaluate(formula.right, env)
    else:
        raise IllTypedFormula("unknown formula " + repr(formula))
