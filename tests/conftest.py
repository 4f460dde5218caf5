"""
Shared fixtures: small Matrix Market files written into tmp_path.
"""

import pytest

SMALL_SYMMETRIC = """%%MatrixMarket matrix coordinate integer symmetric
% 5x5 symmetric matrix, lower triangle not stored
%
5 5 7
1 1 1
1 3 2
2 2 3
2 4 4
3 5 5
4 5 6
5 5 7
"""

SMALL_DENSE = """%%MatrixMarket matrix array integer general
% stored column by column
2 3
1
2
3
4
5
6
"""


@pytest.fixture
def write_mtx(tmp_path):
    """Return a function writing text to a file under tmp_path and returning its path."""

    def _write(content, name="matrix.mtx"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def small_mtx(write_mtx):
    return write_mtx(SMALL_SYMMETRIC, "small.mtx")


@pytest.fixture
def small_dense_mtx(write_mtx):
    return write_mtx(SMALL_DENSE, "small_dense.mtx")
