"""
Unit tests for the textual rendering helpers.

`render_cells` produces the canonical `[c0,c1,...]=value` listing of stored
cells, and `render_window` prints a rectangular block of a 2-D matrix,
default-valued cells included.
"""
import pytest

from sparse_matrix import SparseMatrix
from sparse_matrix.utils.render_utils import (
    format_cell,
    format_coordinate,
    render_cells,
    render_window,
)


def test_format_coordinate_and_cell():
    assert format_coordinate((7,)) == "[7]"
    assert format_coordinate((10, 100, 1000)) == "[10,100,1000]"
    assert format_cell((1, 2), 3.5) == "[1,2]=3.5"
    assert format_cell((0,), "x") == "[0]=x"


def test_render_cells_terminates_every_line():
    cells = [((10, 100), 11), ((20, 200), 22)]
    assert render_cells(cells) == "[10,100]=11\n[20,200]=22\n"
    assert render_cells([]) == ""


@pytest.fixture
def crossed_matrix():
    """
    A 4x4 window with a diagonal and an anti-diagonal, both carrying their
    column index. Cells whose value is 0 are never stored.
    """
    matrix = SparseMatrix(0)
    n = 4
    for i in range(n):
        matrix[i][i] = i
        matrix[n - 1 - i][i] = i
    return matrix


def test_crossed_matrix_storage(crossed_matrix):
    """The zero-valued corner cells were evicted on write."""
    assert crossed_matrix.size() == 6
    assert crossed_matrix.render() == (
        "[0,3]=3\n"
        "[1,1]=1\n"
        "[1,2]=2\n"
        "[2,1]=1\n"
        "[2,2]=2\n"
        "[3,3]=3\n"
    )


def test_render_window(crossed_matrix):
    """Every cell of the window is printed, and reading it creates no cells."""
    text = render_window(crossed_matrix, range(4), range(4))

    assert text == (
        "0 0 0 3\n"
        "0 1 2 0\n"
        "0 1 2 0\n"
        "0 0 0 3\n"
    )
    assert crossed_matrix.size() == 6


def test_render_window_custom_separator(crossed_matrix):
    assert render_window(crossed_matrix, [1], range(1, 3), sep=",") == "1,2\n"


def test_render_window_requires_two_dimensions():
    with pytest.raises(ValueError):
        render_window(SparseMatrix(0, ndim=3), range(2), range(2))
