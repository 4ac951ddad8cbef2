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

import argparse
import logging
import sys
from typing import List, Optional

from .encoder import inverse_constraints
from .errors import InputError
from .inverse import solve_inverse
from .matrix import read_matrix, report, is_identity
from .solver import SOLVERS, Status, create_solver

logger = logging.getLogger("smtinv")

EXIT_INPUT = 1
EXIT_USAGE = 2
EXIT_UNSAT = 3
EXIT_UNKNOWN = 4
EXIT_VERIFY = 5


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="smt-inv-matrix",
        description="Finds the inverse of a square matrix modulo an "
        "integer with an SMT solver.")
    parser.add_argument("--mod", type=int, required=True,
                        help="the modulus, at least 2")
    parser.add_argument("--cols", type=int, required=True,
                        help="number of rows and columns of the matrix")
    parser.add_argument("--file", required=True,
                        help="file with cols * cols integers in row-major "
                        "order")
    parser.add_argument("--solver", choices=SOLVERS, default="z3",
                        help="constraint solver to use (default: z3)")
    parser.add_argument("--logic", default="NIA",
                        help="SMT logic, z3 only, empty for the default "
                        "tactic (default: NIA)")
    parser.add_argument("--timeout", type=int, default=None,
                        help="timeout in milliseconds, z3 only")
    parser.add_argument("--show-formulas", action="store_true",
                        help="print the encoded constraints")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="print debug messages")

    args = parser.parse_args(argv)
    if args.mod < 2:
        parser.error("--mod must be at least 2")
    if args.cols < 1:
        parser.error("--cols must be at least 1")
    if args.timeout is not None and args.timeout < 1:
        parser.error("--timeout must be positive")
    if args.timeout is not None and args.solver != "z3":
        parser.error("--timeout requires --solver z3")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    try:
        matrix = read_matrix(args.file, args.cols)
    except InputError as err:
        print("error: " + str(err), file=sys.stderr)
        return EXIT_INPUT

    if args.show_formulas:
        for formula in sorted(inverse_constraints(args.cols, args.mod, matrix),
                              key=str):
            print(formula)
        print()

    try:
        solver = create_solver(args.solver, args.mod,
                               logic=args.logic or None, timeout=args.timeout)
    except ValueError as err:
        print("error: " + str(err), file=sys.stderr)
        return EXIT_USAGE

    outcome = solve_inverse(args.cols, args.mod, matrix, solver)
    if outcome.status is Status.UNSATISFIABLE:
        print("UNSAT", file=sys.stderr)
        return EXIT_UNSAT
    elif outcome.status is Status.UNKNOWN:
        print("UNKNOWN", file=sys.stderr)
        return EXIT_UNKNOWN

    product = report(args.cols, args.mod, matrix, outcome.matrix)
    if not is_identity(args.cols, product):
        logger.error("product of input and result is not the identity")
        return EXIT_VERIFY
    return 0


if __name__ == '__main__':
    sys.exit(main())
