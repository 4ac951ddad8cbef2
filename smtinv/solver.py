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

import enum
import itertools
import logging
import operator
from typing import Any, Callable, Dict, List, Optional, Tuple

import z3
from typeguard import typechecked

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    SATISFIABLE = "sat"
    UNSATISFIABLE = "unsat"
    UNKNOWN = "unknown"


class Solver:
    """
    The narrow interface through which formulas reach a constraint solver
    over the integers. Expressions are opaque objects owned by the solver
    instance, integer valued ones are made by `variable`, `literal`,
    `add_terms`, `mul` and `mod`, boolean valued ones by the `comp_*`
    methods. Only boolean expressions can be passed to `ensure`.
    """

    @property
    def signature(self) -> str:
        """
        Returns the name and version of the solver backend.
        """
        raise NotImplementedError()

    def variable(self, name: str) -> Any:
        """
        Returns the integer variable with the given name. Calling it twice
        with the same name returns the same variable.
        """
        raise NotImplementedError()

    def literal(self, value: int) -> Any:
        raise NotImplementedError()

    def add_terms(self, terms: List[Any]) -> Any:
        raise NotImplementedError()

    def mul(self, elem0: Any, elem1: Any) -> Any:
        raise NotImplementedError()

    def mod(self, elem0: Any, elem1: Any) -> Any:
        """
        Returns the remainder of the first expression divided by the
        second, which is always in the range [0, elem1) for positive elem1.
        """
        raise NotImplementedError()

    def comp_eq(self, elem0: Any, elem1: Any) -> Any:
        raise NotImplementedError()

    def comp_ge(self, elem0: Any, elem1: Any) -> Any:
        raise NotImplementedError()

    def comp_le(self, elem0: Any, elem1: Any) -> Any:
        raise NotImplementedError()

    def ensure(self, constraint: Any):
        """
        Adds the boolean expression to the conjunction of constraints.
        """
        raise NotImplementedError()

    def solve(self) -> Status:
        raise NotImplementedError()

    @property
    def status(self) -> Optional[Status]:
        """
        Returns the result of the last `solve` call, or `None` if the
        solver was not run since the last constraint was added.
        """
        raise NotImplementedError()

    def get_value(self, var: Any) -> Optional[int]:
        """
        Returns the value of the variable in the last solution, or `None`
        if the solution does not assign it. The status of the solver must
        be `SATISFIABLE`.
        """
        raise NotImplementedError()


class Z3Solver(Solver):
    """
    Solver backed by the Z3 theorem prover. Every instance has its own
    Z3 context, so separate instances never share variables.
    """

    @typechecked
    def __init__(self, logic: Optional[str] = "NIA",
                 timeout: Optional[int] = None):
        self.context = z3.Context()
        if logic is None:
            self.solver = z3.Solver(ctx=self.context)
        else:
            try:
                self.solver = z3.SolverFor(logic, ctx=self.context)
            except z3.Z3Exception as err:
                raise ValueError("unknown logic " + repr(logic)) from err
        if timeout is not None:
            assert timeout > 0
            self.solver.set("timeout", timeout)

        self.logic = logic
        self.variables: Dict[str, z3.ArithRef] = {}
        self._status: Optional[Status] = None
        self._model: Optional[z3.ModelRef] = None

    @property
    def signature(self) -> str:
        return "z3-" + z3.get_version_string() + " (" + \
            (self.logic or "default") + ")"

    def variable(self, name: str) -> z3.ArithRef:
        var = self.variables.get(name)
        if var is None:
            var = z3.Int(name, ctx=self.context)
            self.variables[name] = var
        return var

    def literal(self, value: int) -> z3.ArithRef:
        return z3.IntVal(value, ctx=self.context)

    def add_terms(self, terms: List[z3.ArithRef]) -> z3.ArithRef:
        assert terms
        if len(terms) == 1:
            return terms[0]
        return z3.Sum(*terms)

    def mul(self, elem0: z3.ArithRef, elem1: z3.ArithRef) -> z3.ArithRef:
        return elem0 * elem1

    def mod(self, elem0: z3.ArithRef, elem1: z3.ArithRef) -> z3.ArithRef:
        return elem0 % elem1

    def comp_eq(self, elem0: z3.ArithRef, elem1: z3.ArithRef) -> z3.BoolRef:
        return elem0 == elem1

    def comp_ge(self, elem0: z3.ArithRef, elem1: z3.ArithRef) -> z3.BoolRef:
        return elem0 >= elem1

    def comp_le(self, elem0: z3.ArithRef, elem1: z3.ArithRef) -> z3.BoolRef:
        return elem0 <= elem1

    def ensure(self, constraint: z3.BoolRef):
        assert z3.is_bool(constraint)
        self.solver.add(constraint)
        self._status = None
        self._model = None

    def solve(self) -> Status:
        result = self.solver.check()
        if result == z3.sat:
            self._status = Status.SATISFIABLE
            self._model = self.solver.model()
        elif result == z3.unsat:
            self._status = Status.UNSATISFIABLE
        else:
            logger.debug("z3 gave up: %s", self.solver.reason_unknown())
            self._status = Status.UNKNOWN
        return self._status

    @property
    def status(self) -> Optional[Status]:
        return self._status

    def get_value(self, var: z3.ArithRef) -> Optional[int]:
        if self._status is not Status.SATISFIABLE:
            raise RuntimeError("no solution is available")
        value = self._model[var]
        if value is None:
            return None
        return value.as_long()


class SearchExpr:
    """
    Expression of the search solver: a function from an assignment of
    variable names to values. Variables and literals remember their name
    and value, equalities between them remember the pinned variable.
    """

    def __init__(self, func: Callable[[Dict[str, int]], Any],
                 name: Optional[str] = None, value: Optional[int] = None,
                 pin: Optional[Tuple[str, int]] = None):
        self.func = func
        self.name = name
        self.value = value
        self.pin = pin

    def __call__(self, env: Dict[str, int]) -> Any:
        return self.func(env)


class SearchSolver(Solver):
    """
    A solver that enumerates every assignment of the free variables from
    the range [low, high). Variables fixed to a literal by an equality
    constraint are not enumerated. Problems with more than `limit`
    candidate assignments are reported as `UNKNOWN` without any search,
    so this is only good for tiny instances.
    """

    @typechecked
    def __init__(self, low: int, high: int, limit: int = 1000000):
        assert low < high and limit >= 1
        self.low = low
        self.high = high
        self.limit = limit
        self.variables: Dict[str, SearchExpr] = {}
        self.constraints: List[SearchExpr] = []
        self.pinned: Dict[str, int] = {}
        self._status: Optional[Status] = None
        self._model: Optional[Dict[str, int]] = None

    @property
    def signature(self) -> str:
        return "search"

    def variable(self, name: str) -> SearchExpr:
        var = self.variables.get(name)
        if var is None:
            var = SearchExpr(operator.itemgetter(name), name=name)
            self.variables[name] = var
        return var

    def literal(self, value: int) -> SearchExpr:
        return SearchExpr(lambda env: value, value=value)

    def add_terms(self, terms: List[SearchExpr]) -> SearchExpr:
        assert terms
        terms = list(terms)
        return SearchExpr(lambda env: sum(t(env) for t in terms))

    def mul(self, elem0: SearchExpr, elem1: SearchExpr) -> SearchExpr:
        return SearchExpr(lambda env: elem0(env) * elem1(env))

    def mod(self, elem0: SearchExpr, elem1: SearchExpr) -> SearchExpr:
        return SearchExpr(lambda env: elem0(env) % elem1(env))

    def comp_eq(self, elem0: SearchExpr, elem1: SearchExpr) -> SearchExpr:
        pin = None
        if elem0.name is not None and elem1.value is not None:
            pin = (elem0.name, elem1.value)
        elif elem1.name is not None and elem0.value is not None:
            pin = (elem1.name, elem0.value)
        return SearchExpr(lambda env: elem0(env) == elem1(env), pin=pin)

    def comp_ge(self, elem0: SearchExpr, elem1: SearchExpr) -> SearchExpr:
        return SearchExpr(lambda env: elem0(env) >= elem1(env))

    def comp_le(self, elem0: SearchExpr, elem1: SearchExpr) -> SearchExpr:
        return SearchExpr(lambda env: elem0(env) <= elem1(env))

    def ensure(self, constraint: SearchExpr):
        self.constraints.append(constraint)
        if constraint.pin is not None:
            name, value = constraint.pin
            # a conflicting second pin is caught by its own constraint
            self.pinned.setdefault(name, value)
        self._status = None
        self._model = None

    def solve(self) -> Status:
        free = [name for name in self.variables if name not in self.pinned]
        size = (self.high - self.low) ** len(free)
        if size > self.limit:
            logger.debug("search space of %d exceeds limit %d",
                         size, self.limit)
            self._status = Status.UNKNOWN
            return self._status

        env = dict(self.pinned)
        domain = range(self.low, self.high)
        for values in itertools.product(domain, repeat=len(free)):
            env.update(zip(free, values))
            if all(c(env) for c in self.constraints):
                self._model = dict(env)
                self._status = Status.SATISFIABLE
                return self._status

        self._status = Status.UNSATISFIABLE
        return self._status

    @property
    def status(self) -> Optional[Status]:
        return self._status

    def get_value(self, var: SearchExpr) -> Optional[int]:
        if self._status is not Status.SATISFIABLE:
            raise RuntimeError("no solution is available")
        assert var.name is not None
        return self._model.get(var.name)


SOLVERS = ["z3", "search"]


@typechecked
def create_solver(name: str, mod: int, logic: Optional[str] = "NIA",
                  timeout: Optional[int] = None) -> Solver:
    """
    Creates the named solver for problems modulo `mod`. The search solver
    enumerates the canonical residues [0, mod).
    """

    if name == "z3":
        return Z3Solver(logic=logic, timeout=timeout)
    elif name == "search":
        return SearchSolver(0, mod)
    else:
        raise ValueError("unknown solver " + repr(name))
