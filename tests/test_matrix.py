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

import io

import pytest

from smtinv import InputError
from smtinv.matrix import read_matrix, mat_mul, identity, is_identity, \
    to_grid, format_matrix, report


def test_read_matrix(tmp_path):
    path = tmp_path / "matrix.txt"
    path.write_text("1 2\n  -3\t4 99\n")
    assert read_matrix(path, 2) == [1, 2, -3, 4]
    assert read_matrix(str(path), 1) == [1]

    path.write_text("+7 -0 007 -12")
    assert read_matrix(path, 2) == [7, 0, 7, -12]


def test_read_errors(tmp_path):
    path = tmp_path / "short.txt"
    path.write_text("1 2 3\n")
    with pytest.raises(InputError):
        read_matrix(path, 2)

    path = tmp_path / "bad.txt"
    path.write_text("1 2 x 4\n")
    with pytest.raises(InputError):
        read_matrix(path, 2)

    path = tmp_path / "float.txt"
    path.write_text("1 2 3.0 4\n")
    with pytest.raises(InputError):
        read_matrix(path, 2)

    for text in ["1 2 1_000 4\n", "1 2 \u0663 4\n", "1 2 0x3 4\n",
                 "1 -+2 3 4\n"]:
        path = tmp_path / "strict.txt"
        path.write_text(text, encoding="utf-8")
        with pytest.raises(InputError):
            read_matrix(path, 2)

    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe 1 2 3 4")
    with pytest.raises(InputError):
        read_matrix(path, 2)

    with pytest.raises(InputError):
        read_matrix(tmp_path / "missing.txt", 2)


def test_mat_mul():
    assert mat_mul(1, 5, [3], [2]) == [1]
    assert mat_mul(2, 100, [1, 2, 3, 4], [5, 6, 7, 8]) == [19, 22, 43, 50]
    assert mat_mul(2, 10, [1, 2, 3, 4], [5, 6, 7, 8]) == [9, 2, 3, 0]
    assert mat_mul(1, 7, [-1], [3]) == [4]

    matrix = [1, 2, 3, 0, 1, 4, 5, 6, 0]
    result = [4, 4, 5, 6, 6, 3, 2, 4, 1]
    assert mat_mul(3, 7, matrix, result) == identity(3)


def test_identity():
    assert identity(1) == [1]
    assert identity(2) == [1, 0, 0, 1]
    assert is_identity(3, identity(3))
    assert not is_identity(2, [1, 1, 0, 1])


def test_grid():
    grid = to_grid(2, [1, 2, 3, 4])
    assert grid.shape == (2, 2)
    assert grid[1, 0] == 3
    assert format_matrix(2, [1, 2, 3, 4]) == "1 2\n3 4"
    assert format_matrix(1, [10 ** 30]) == str(10 ** 30)


def test_report():
    out = io.StringIO()
    product = report(1, 5, [3], [2], out)
    assert product == [1]
    assert out.getvalue() == \
        "== input ==\n3\n\n" \
        "== result ==\n2\n\n" \
        "== input * result ==\n1\n\n"


if __name__ == '__main__':
    test_report()
