from __future__ import annotations
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from sparse_matrix.errors import ArityError, ChainReuseError
from sparse_matrix.utils.indices_utils import Coordinate, normalize_key
from sparse_matrix.utils.render_utils import format_coordinate

if TYPE_CHECKING:
    from sparse_matrix.structures.sparse_matrix import SparseMatrix

T = TypeVar("T")


class IndexBuilder(Generic[T]):
    """
    A single-use cursor that accumulates coordinate components for a `SparseMatrix`.

    Each indexing step (`builder[k]` or `builder[k0, k1, ...]`) appends the
    given components to a copy of the prefix and returns the next stage: a new
    `IndexBuilder` while components are still missing, or a `CellRef` once all
    `ndim` components are known. The step consumes the builder; indexing it
    again raises `ChainReuseError`. The builder is consumed as soon as the
    step is attempted, before the key is validated, so a rejected key such as
    `row["x"]` also uses it up.

    An incomplete builder cannot be read. Comparing it, converting it, or
    asking for its value raises `ArityError` instead of quietly returning the
    default.

    Attributes
    ----------
    _matrix : SparseMatrix
        The matrix the chain resolves against.
    _prefix : Coordinate
        The components supplied so far.
    _consumed : bool
        Set once the builder has taken its indexing step.
    """
    __slots__ = ("_matrix", "_prefix", "_consumed")

    def __init__(self, matrix: "SparseMatrix[T]", prefix: Coordinate = ()):
        self._matrix = matrix
        self._prefix = prefix
        self._consumed = False

    @property
    def prefix(self) -> Coordinate:
        """The coordinate components held by this stage."""
        return self._prefix

    @property
    def remaining(self) -> int:
        """How many components are still needed to reach a cell."""
        return self._matrix.ndim - len(self._prefix)

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def value(self) -> T:
        self._raise_incomplete()

    def _extend(self, key: Any) -> Coordinate:
        """
        Consumes the builder and returns the prefix extended by `key`.

        Raises
        ------
        ChainReuseError
            If the builder has already taken its step.
        ArityError
            If the extension would exceed `ndim` components.
        """
        if self._consumed:
            raise ChainReuseError(
                f"index chain at {format_coordinate(self._prefix)} was already advanced; "
                f"builders are single-use"
            )
        self._consumed = True

        coord = self._prefix + normalize_key(key)
        if len(coord) > self._matrix.ndim:
            raise ArityError(
                f"too many coordinate components: got {len(coord)} for a {self._matrix.ndim}-D matrix"
            )
        return coord

    def __getitem__(self, key: Any) -> Union["IndexBuilder[T]", "CellRef[T]"]:
        coord = self._extend(key)
        if len(coord) == self._matrix.ndim:
            return CellRef(self._matrix, coord)
        return IndexBuilder(self._matrix, coord)

    def __setitem__(self, key: Any, value: T) -> None:
        coord = self._extend(key)
        if len(coord) != self._matrix.ndim:
            raise ArityError(
                f"cannot assign through an incomplete index: got {len(coord)} of "
                f"{self._matrix.ndim} coordinate components"
            )
        self._matrix._store(coord, value)

    def _raise_incomplete(self):
        raise ArityError(
            f"index chain at {format_coordinate(self._prefix)} is incomplete: "
            f"{self.remaining} more component(s) needed before it can be read"
        )

    def __eq__(self, other: object) -> bool:
        self._raise_incomplete()

    def __ne__(self, other: object) -> bool:
        self._raise_incomplete()

    def __bool__(self) -> bool:
        self._raise_incomplete()

    def __int__(self) -> int:
        self._raise_incomplete()

    def __float__(self) -> float:
        self._raise_incomplete()

    __hash__ = None
    __iter__ = None

    def __repr__(self) -> str:
        return f"IndexBuilder(prefix={self._prefix!r}, remaining={self.remaining})"


def unwrap_value(other: Any) -> Any:
    """Returns the current value of a `CellRef`, or `other` unchanged."""
    return other.value if isinstance(other, CellRef) else other


class CellRef(Generic[T]):
    """
    A reference to one cell of a `SparseMatrix`, produced by a complete index chain.

    Reads delegate to `SparseMatrix.get` and writes to `SparseMatrix.set`, so a
    `CellRef` never caches a value: each read observes the matrix as it is
    now. `assign()` returns the same reference, which lets writes be chained::

        m[100][100].assign(314).assign(0).assign(217)

    Comparisons and numeric conversions operate on the current value, so
    `m[1][2] == 5` reads naturally. Writing a `CellRef` into a cell
    (`m[1][1] = m[2][2]`) copies its current value, not the reference.

    Augmented assignment is not supported: `m[i][j] += 1` raises `TypeError`.
    Spell it `cell.assign(cell.value + 1)`.
    """
    __slots__ = ("_matrix", "_coord")

    def __init__(self, matrix: "SparseMatrix[T]", coord: Coordinate):
        self._matrix = matrix
        self._coord = coord

    @property
    def coordinate(self) -> Coordinate:
        return self._coord

    @property
    def value(self) -> T:
        """The value currently stored at this cell, or the matrix default."""
        return self._matrix._load(self._coord)

    @value.setter
    def value(self, value: T) -> None:
        self._matrix._store(self._coord, value)

    def get(self) -> T:
        return self._matrix._load(self._coord)

    def assign(self, value: T) -> "CellRef[T]":
        """
        Writes `value` to the cell and returns this reference.

        Writing the matrix default erases the cell.

        Parameters
        ----------
        value : T
            The value to write.

        Returns
        -------
        CellRef[T]
            `self`, so further assignments can be chained.
        """
        self._matrix._store(self._coord, value)
        return self

    def _raise_complete(self):
        raise ArityError(
            f"coordinate {format_coordinate(self._coord)} already has all "
            f"{self._matrix.ndim} components"
        )

    def __getitem__(self, key: Any):
        self._raise_complete()

    def __setitem__(self, key: Any, value: Any) -> None:
        self._raise_complete()

    def __eq__(self, other: object) -> bool:
        return self.value == unwrap_value(other)

    def __ne__(self, other: object) -> bool:
        return self.value != unwrap_value(other)

    def __lt__(self, other: Any) -> bool:
        return self.value < unwrap_value(other)

    def __le__(self, other: Any) -> bool:
        return self.value <= unwrap_value(other)

    def __gt__(self, other: Any) -> bool:
        return self.value > unwrap_value(other)

    def __ge__(self, other: Any) -> bool:
        return self.value >= unwrap_value(other)

    __hash__ = None
    # Not a sequence, even though it defines __getitem__.
    __iter__ = None

    def __bool__(self) -> bool:
        return bool(self.value)

    def __int__(self) -> int:
        return int(self.value)

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return str(self.value)

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec)

    def __repr__(self) -> str:
        return f"CellRef({format_coordinate(self._coord)}={self.value!r})"
