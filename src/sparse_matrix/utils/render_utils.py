from __future__ import annotations
from typing import TYPE_CHECKING, Any, Iterable, Tuple

from sparse_matrix.utils.indices_utils import Coordinate

if TYPE_CHECKING:
    from sparse_matrix.structures.sparse_matrix import SparseMatrix


def format_coordinate(coord: Coordinate) -> str:
    """Formats a coordinate as `[c0,c1,...]` with no spaces."""
    return "[" + ",".join(str(c) for c in coord) + "]"


def format_cell(coord: Coordinate, value: Any) -> str:
    """Formats a stored cell as `[c0,c1,...]=value`."""
    return f"{format_coordinate(coord)}={value}"


def render_cells(cells: Iterable[Tuple[Coordinate, Any]]) -> str:
    """
    Renders cells one per line, each line terminated by a newline.

    Parameters
    ----------
    cells : Iterable[Tuple[Coordinate, Any]]
        `(coordinate, value)` pairs, already in the order they should appear.

    Returns
    -------
    str
        The rendered text; an empty string when there are no cells.
    """
    return "".join(format_cell(coord, value) + "\n" for coord, value in cells)


def render_window(matrix: "SparseMatrix", rows: Iterable[int], cols: Iterable[int], sep: str = " ") -> str:
    """
    Renders a rectangular window of a 2-D matrix as a text grid.

    Every cell in the window is read, so default-valued cells appear too.
    Reads go through `SparseMatrix.get` and never create cells.

    Parameters
    ----------
    matrix : SparseMatrix
        A matrix with `ndim == 2`.
    rows : Iterable[int]
        Row indices (first coordinate component), top to bottom.
    cols : Iterable[int]
        Column indices (second coordinate component), left to right.
    sep : str, optional
        Separator placed between values on a line, by default a single space.

    Returns
    -------
    str
        One line per row, each terminated by a newline.

    Raises
    ------
    ValueError
        If the matrix is not 2-D.
    """
    if matrix.ndim != 2:
        raise ValueError(f"render_window needs a 2-D matrix, got ndim={matrix.ndim}")

    cols = list(cols)
    lines = []
    for i in rows:
        lines.append(sep.join(str(matrix.get((i, j))) for j in cols) + "\n")
    return "".join(lines)
