from __future__ import annotations
import copy
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Iterator, List, Tuple, TypeVar, Union

from sparse_matrix.structures.index_builder import CellRef, IndexBuilder, unwrap_value
from sparse_matrix.utils.indices_utils import Coordinate, normalize_coordinate, validate_ndim
from sparse_matrix.utils.iter_utils import insert_sorted, iter_cells, remove_sorted
from sparse_matrix.utils.render_utils import format_coordinate, render_cells

if TYPE_CHECKING:
    from sparse_matrix.config.matrix_config import MatrixConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

Cell = Tuple[Coordinate, T]

_MISSING = object()


class CellsView(Generic[T]):
    """
    A restartable view over the stored cells of a `SparseMatrix`.

    Every `iter()` call starts a fresh pass in ascending lexicographic
    coordinate order. The view is live: it reflects the matrix at the time
    iteration starts, and mutating the matrix mid-iteration is not supported.
    """
    __slots__ = ("_matrix",)

    def __init__(self, matrix: "SparseMatrix[T]"):
        self._matrix = matrix

    def __iter__(self) -> Iterator[Cell]:
        return iter_cells(self._matrix._keys, self._matrix._cells)

    def __len__(self) -> int:
        return len(self._matrix._cells)

    def __repr__(self) -> str:
        return f"CellsView(size={len(self)})"


class SparseMatrix(Generic[T]):
    """
    An N-dimensional sparse matrix over an unbounded grid of non-negative coordinates.

    Every cell logically holds `default` until written. Only cells whose value
    differs from the default are stored, so writing the default back erases
    the cell. No stored cell ever equals the default.

    Cells are addressed either one component at a time, or with all
    components at once::

        m = SparseMatrix(-1)            # 2-D, default -1
        m[10][100] = 11                 # chained form
        m[20, 200] = 22                 # N-ary form
        assert m[10][100] == 11
        m[10][100].assign(314).assign(-1)
        assert m.size() == 1

    Stored cells iterate (and render) in ascending lexicographic coordinate
    order, first component most significant.

    Parameters
    ----------
    default : T, optional
        The value of every unwritten cell. Deep-copied in. When omitted,
        `value_type()` is used.
    ndim : int, optional
        Number of dimensions (>= 1), fixed for the matrix lifetime. By default 2.
    value_type : Callable[[], T], optional
        Factory for the zero value used when `default` is omitted. By default `int`.
    """
    __slots__ = ("_ndim", "_default", "_cells", "_keys")

    def __init__(self, default: Any = _MISSING, *, ndim: int = 2, value_type: Callable[[], T] = int):
        self._ndim = validate_ndim(ndim)
        self._default: T = value_type() if default is _MISSING else copy.deepcopy(unwrap_value(default))
        self._cells: Dict[Coordinate, T] = {}
        # Sorted mirror of `_cells` keys; drives ordered iteration.
        self._keys: List[Coordinate] = []

    @classmethod
    def from_config(cls, config: "MatrixConfig") -> "SparseMatrix":
        """Creates an empty matrix with the dimensionality and default of `config`."""
        return cls(config.default, ndim=config.ndim)

    @property
    def ndim(self) -> int:
        return self._ndim

    @property
    def default(self) -> T:
        return self._default

    # --- Storage contract ---
    def _load(self, coord: Coordinate) -> T:
        return self._cells.get(coord, self._default)

    def _store(self, coord: Coordinate, value: T) -> None:
        # A cell reference is written by value, never stored as a live link.
        value = unwrap_value(value)
        if value == self._default:
            if coord in self._cells:
                del self._cells[coord]
                remove_sorted(self._keys, coord)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(f"Evicted cell {format_coordinate(coord)} (default written)")
            return

        if coord not in self._cells:
            insert_sorted(self._keys, coord)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Stored new cell {format_coordinate(coord)}={value!r}")
        self._cells[coord] = value

    def get(self, coord: Any) -> T:
        """
        Returns the value at `coord`, or the default if no cell is stored there.

        Parameters
        ----------
        coord : Any
            A coordinate of exactly `ndim` non-negative integer components.

        Returns
        -------
        T
            The stored value or the default.

        Raises
        ------
        ArityError
            If `coord` does not have `ndim` components.
        """
        return self._load(normalize_coordinate(coord, self._ndim))

    def set(self, coord: Any, value: T) -> None:
        """
        Writes `value` at `coord`.

        If `value == default`, any cell stored at `coord` is removed instead
        (a no-op when none is stored). Otherwise the cell is inserted or
        overwritten.

        Parameters
        ----------
        coord : Any
            A coordinate of exactly `ndim` non-negative integer components.
        value : T
            The value to write.
        """
        self._store(normalize_coordinate(coord, self._ndim), value)

    def erase(self, coord: Any) -> bool:
        """
        Removes the cell at `coord`.

        Returns
        -------
        bool
            True if a cell was stored at `coord` before the call.
        """
        coord = normalize_coordinate(coord, self._ndim)
        present = coord in self._cells
        self._store(coord, self._default)
        return present

    def clear(self) -> None:
        """Drops every stored cell. The default and dimensionality are unchanged."""
        logger.debug(f"Clearing {len(self._cells)} cell(s)")
        self._cells.clear()
        self._keys.clear()

    def size(self) -> int:
        """Number of stored (non-default) cells."""
        return len(self._cells)

    def iterate(self) -> CellsView[T]:
        """Returns a restartable view of `(coordinate, value)` pairs in coordinate order."""
        return CellsView(self)

    def render(self) -> str:
        """
        Renders stored cells as text, one `[c0,c1,...]=value` line per cell.

        Lines appear in iteration order and each ends with a newline. An empty
        matrix renders as an empty string.
        """
        return render_cells(self.iterate())

    # --- Copy / move ---
    def copy(self) -> "SparseMatrix[T]":
        """
        Returns a fully independent duplicate of this matrix.

        Stored values and the default are deep-copied, so mutating either
        matrix (or a mutable value held by it) never affects the other.
        """
        return self.__deepcopy__({})

    def __copy__(self) -> "SparseMatrix[T]":
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "SparseMatrix[T]":
        duplicate = type(self).__new__(type(self))
        memo[id(self)] = duplicate
        duplicate._ndim = self._ndim
        duplicate._default = copy.deepcopy(self._default, memo)
        duplicate._cells = copy.deepcopy(self._cells, memo)
        duplicate._keys = list(self._keys)
        return duplicate

    def take(self) -> "SparseMatrix[T]":
        """
        Moves the contents of this matrix into a new one.

        The returned matrix owns the stored cells and the default. This matrix
        is left empty and reusable, keeping its dimensionality and an
        equal (copied) default.

        Returns
        -------
        SparseMatrix[T]
            A matrix holding everything this one held.
        """
        moved = type(self).__new__(type(self))
        moved._ndim = self._ndim
        moved._default = self._default
        moved._cells = self._cells
        moved._keys = self._keys

        self._default = copy.deepcopy(self._default)
        self._cells = {}
        self._keys = []
        logger.debug(f"Moved {len(moved._cells)} cell(s) into a new matrix")
        return moved

    # --- Indexing ---
    def __getitem__(self, key: Any) -> Union[IndexBuilder[T], CellRef[T]]:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Starting index chain with key {key!r} on {self._ndim}-D matrix")
        return IndexBuilder(self)[key]

    def __setitem__(self, key: Any, value: T) -> None:
        IndexBuilder(self)[key] = value

    def __contains__(self, coord: Any) -> bool:
        return normalize_coordinate(coord, self._ndim) in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.iterate())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return (
            self._ndim == other._ndim
            and self._default == other._default
            and self._cells == other._cells
        )

    __hash__ = None

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"SparseMatrix(ndim={self._ndim}, default={self._default!r}, size={len(self._cells)})"
