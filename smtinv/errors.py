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
Exceptions raised by the modular matrix inverse encoder. Unsatisfiable
and undecided solver results are not errors, see `smtinv.solver.Status`.
"""


class SmtInvError(Exception):
    pass


class InputError(SmtInvError):
    """
    The input matrix could not be read: missing file, a token that is not
    a decimal integer, or fewer than cols * cols entries.
    """


class IllTypedFormula(SmtInvError, TypeError):
    """
    A boolean formula was used where an integer one is required, or the
    other way around. This is always a bug in the code building formulas.
    """


class DecodeError(SmtInvError):
    """
    The solver model does not assign a value to a constrained cell.
    """
