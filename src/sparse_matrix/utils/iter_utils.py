from __future__ import annotations
from bisect import bisect_left
from typing import Dict, Iterator, List, Tuple, TypeVar

from sparse_matrix.utils.indices_utils import Coordinate

T = TypeVar("T")


def insert_sorted(keys: List[Coordinate], coord: Coordinate) -> bool:
    """
    Inserts `coord` into the sorted key list unless it is already present.

    Tuples compare lexicographically, component 0 first, which is exactly the
    iteration order the matrix guarantees.

    Parameters
    ----------
    keys : List[Coordinate]
        A list kept in ascending order.
    coord : Coordinate
        The coordinate to insert.

    Returns
    -------
    bool
        True if the coordinate was inserted, False if it was already present.
    """
    pos = bisect_left(keys, coord)
    if pos < len(keys) and keys[pos] == coord:
        return False
    keys.insert(pos, coord)
    return True


def remove_sorted(keys: List[Coordinate], coord: Coordinate) -> bool:
    """
    Removes `coord` from the sorted key list if present.

    Returns
    -------
    bool
        True if the coordinate was found and removed.
    """
    pos = bisect_left(keys, coord)
    if pos < len(keys) and keys[pos] == coord:
        del keys[pos]
        return True
    return False


def iter_cells(keys: List[Coordinate], cells: Dict[Coordinate, T]) -> Iterator[Tuple[Coordinate, T]]:
    """
    Yields `(coordinate, value)` pairs following the order of `keys`.

    Parameters
    ----------
    keys : List[Coordinate]
        Sorted coordinates, one per stored cell.
    cells : Dict[Coordinate, T]
        The coordinate-to-value mapping.

    Yields
    ------
    Iterator[Tuple[Coordinate, T]]
        Stored cells in ascending lexicographic coordinate order.
    """
    for coord in keys:
        yield coord, cells[coord]
