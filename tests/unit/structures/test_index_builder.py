"""
Unit tests for the chained index protocol (`IndexBuilder` and `CellRef`).

A chain such as `m[i][j][k]` passes through single-use `IndexBuilder` stages
until all components are known, at which point it resolves to a `CellRef`.
These tests check the stage transitions, the arity checks that stop a chain
from being read or written too early (or too late), and the chained
assignment behaviour of `CellRef.assign`.
"""
import pytest

from sparse_matrix import ArityError, CellRef, ChainReuseError, IndexBuilder, SparseMatrix


# ---------------------------------------------------------------------------
# Stage transitions
# ---------------------------------------------------------------------------
def test_chain_stages_for_three_dimensions():
    """Each step holds one more component until the chain resolves to a cell."""
    matrix = SparseMatrix(0, ndim=3)

    first = matrix[1]
    assert isinstance(first, IndexBuilder)
    assert first.prefix == (1,)
    assert first.remaining == 2

    second = first[2]
    assert isinstance(second, IndexBuilder)
    assert second.prefix == (1, 2)
    assert second.remaining == 1

    cell = second[3]
    assert isinstance(cell, CellRef)
    assert cell.coordinate == (1, 2, 3)


def test_single_dimension_resolves_immediately():
    """For a 1-D matrix the first index step already yields a `CellRef`."""
    matrix = SparseMatrix(-1, ndim=1)
    cell = matrix[7]

    assert isinstance(cell, CellRef)
    assert cell.coordinate == (7,)
    assert cell == -1


def test_nary_and_mixed_indexing():
    """Tuple keys add several components in one step and can be mixed with chaining."""
    matrix = SparseMatrix(0, ndim=3)

    matrix[1, 2][3] = 6
    assert matrix[1][2, 3] == 6
    assert matrix[1, 2, 3] == 6
    assert matrix.get((1, 2, 3)) == 6


def test_builder_is_single_use():
    """A builder stage that has been advanced cannot be advanced again."""
    matrix = SparseMatrix(0)
    row = matrix[4]

    row[5] = 1
    with pytest.raises(ChainReuseError):
        row[6] = 2
    with pytest.raises(ChainReuseError):
        row[6]

    # Only the first write went through.
    assert matrix.size() == 1
    assert matrix[4][5] == 1


def test_builder_consumed_flag():
    matrix = SparseMatrix(0, ndim=3)
    builder = matrix[0]
    assert builder.consumed is False
    builder[0]
    assert builder.consumed is True


# ---------------------------------------------------------------------------
# Arity violations
# ---------------------------------------------------------------------------
def test_incomplete_chain_cannot_be_read():
    """
    Reading a chain that is still missing components raises instead of
    returning the default.
    """
    matrix = SparseMatrix(0, ndim=3)

    with pytest.raises(ArityError):
        matrix[1] == 0
    with pytest.raises(ArityError):
        matrix[1][2] != 0
    with pytest.raises(ArityError):
        bool(matrix[1])
    with pytest.raises(ArityError):
        int(matrix[1][2])
    with pytest.raises(ArityError):
        float(matrix[1])
    with pytest.raises(ArityError):
        matrix[1].value


def test_incomplete_chain_cannot_be_written():
    """Assigning before the coordinate is complete raises and stores nothing."""
    matrix = SparseMatrix(0, ndim=3)

    with pytest.raises(ArityError):
        matrix[1] = 5
    with pytest.raises(ArityError):
        matrix[1][2] = 5
    with pytest.raises(ArityError):
        matrix[1, 2] = 5

    assert matrix.size() == 0


def test_too_many_components():
    """Supplying more components than the matrix has dimensions raises."""
    matrix = SparseMatrix(0)

    with pytest.raises(ArityError):
        matrix[1, 2, 3]
    with pytest.raises(ArityError):
        matrix[1][2, 3] = 4
    with pytest.raises(ArityError):
        matrix[1][2][3]
    with pytest.raises(ArityError):
        matrix[1][2][3] = 4

    assert matrix.size() == 0


def test_arity_error_is_an_index_error():
    """`ArityError` subclasses `IndexError` so generic index handling still catches it."""
    matrix = SparseMatrix(0, ndim=1)
    with pytest.raises(IndexError):
        matrix[1][2]


def test_chain_objects_are_not_iterable_or_hashable():
    """Neither stage behaves like a sequence or a dictionary key."""
    matrix = SparseMatrix(0)
    with pytest.raises(TypeError):
        iter(matrix[1])
    with pytest.raises(TypeError):
        iter(matrix[1][2])
    with pytest.raises(TypeError):
        hash(matrix[1][2])


# ---------------------------------------------------------------------------
# CellRef reads and chained writes
# ---------------------------------------------------------------------------
def test_reassignment_chain():
    """Chained assignments apply in order and the last one wins."""
    matrix = SparseMatrix()
    matrix[100][100].assign(314).assign(0).assign(217)

    assert matrix[100][100] == 217
    assert matrix.size() == 1


def test_reassignment_steps_are_observable():
    """Each assignment in a chain is a separate write visible to the matrix."""
    matrix = SparseMatrix()
    cell = matrix[100][100]

    same = cell.assign(314)
    assert same is cell
    assert matrix.get((100, 100)) == 314
    assert matrix.size() == 1

    cell.assign(0)
    assert matrix.get((100, 100)) == 0
    assert matrix.size() == 0

    cell.assign(217)
    assert matrix.get((100, 100)) == 217
    assert matrix.size() == 1


def test_cellref_reads_live_value():
    """A `CellRef` does not cache: it reflects later writes through other paths."""
    matrix = SparseMatrix(-1)
    cell = matrix[3][4]
    assert cell.get() == -1

    matrix.set((3, 4), 12)
    assert cell.value == 12
    assert cell == 12


def test_cellref_value_setter():
    matrix = SparseMatrix(0)
    cell = matrix[2][3]
    cell.value = 9
    assert matrix.get((2, 3)) == 9
    cell.value = 0
    assert matrix.size() == 0


def test_cellref_comparisons_and_conversions():
    """Comparisons and conversions operate on the current value."""
    matrix = SparseMatrix(0)
    matrix[0][1] = 5
    matrix[0][2] = 7
    low, high = matrix[0][1], matrix[0][2]

    assert low < high
    assert low <= 5
    assert high > 6
    assert high >= 7
    assert low != high
    assert low == matrix[0][1]
    assert int(low) == 5
    assert float(high) == 7.0
    assert bool(low) is True
    assert bool(matrix[9][9]) is False
    assert str(low) == "5"
    assert f"{high:03d}" == "007"


def test_cellref_cannot_be_indexed_further():
    """A resolved cell has all its components; indexing it is an arity violation."""
    matrix = SparseMatrix(0)
    cell = matrix[1][2]

    with pytest.raises(ArityError):
        cell[3]
    with pytest.raises(ArityError):
        cell[3] = 1


def test_reprs():
    matrix = SparseMatrix(0, ndim=3)
    matrix[1, 2, 3] = 4

    assert repr(matrix[1]) == "IndexBuilder(prefix=(1,), remaining=2)"
    assert repr(matrix[1][2][3]) == "CellRef([1,2,3]=4)"


def test_rejected_key_still_consumes_builder():
    """A step that fails validation uses up the builder all the same."""
    matrix = SparseMatrix(0)
    row = matrix[1]

    with pytest.raises(TypeError):
        row["x"]
    with pytest.raises(ChainReuseError):
        row[2] = 5
    assert matrix.size() == 0


def test_augmented_assignment_is_unsupported():
    """`+=` on a cell raises; the explicit read-then-assign spelling works."""
    matrix = SparseMatrix(0)
    matrix[1][2] = 4

    with pytest.raises(TypeError):
        matrix[1][2] += 1

    cell = matrix[1][2]
    cell.assign(cell.value + 1)
    assert matrix.get((1, 2)) == 5


# ---------------------------------------------------------------------------
# Writing one cell into another
# ---------------------------------------------------------------------------
def _assert_no_default_stored(matrix):
    assert all(value != matrix.default for _, value in matrix)
    assert all(not isinstance(value, CellRef) for _, value in matrix)


def test_copying_cell_via_chained_assignment_stores_value():
    """
    `m[1][1] = m[2][2]` copies the current value. Resetting the source
    afterwards leaves the copy intact and storage free of defaults.
    """
    matrix = SparseMatrix(0)
    matrix[2][2] = 5
    matrix[1][1] = matrix[2][2]

    matrix[2][2] = 0

    assert matrix[1][1] == 5
    assert matrix.size() == 1
    assert matrix.render() == "[1,1]=5\n"
    _assert_no_default_stored(matrix)


def test_copying_default_valued_cell_stores_nothing():
    """Copying an unwritten cell writes the default, so nothing is stored."""
    matrix = SparseMatrix(-1)
    matrix[3][3] = 7
    matrix[3][3] = matrix[8][8]

    assert matrix.size() == 0
    assert matrix[3][3] == -1


def test_assign_with_cell_reference_stores_value():
    matrix = SparseMatrix(0)
    matrix[0][1] = 9
    target = matrix[4][4]

    assert target.assign(matrix[0][1]) is target
    matrix[0][1] = 0

    assert target == 9
    assert matrix.size() == 1
    _assert_no_default_stored(matrix)


def test_set_and_nary_write_with_cell_reference_store_value():
    matrix = SparseMatrix(0, ndim=3)
    matrix[1, 1, 1] = 3

    matrix.set((2, 2, 2), matrix[1, 1, 1])
    matrix[3, 3, 3] = matrix[1][1][1]
    matrix[1, 1, 1] = 0

    assert matrix.get((2, 2, 2)) == 3
    assert matrix.get((3, 3, 3)) == 3
    assert matrix.size() == 2
    _assert_no_default_stored(matrix)


def test_copy_of_matrix_does_not_reach_other_matrix():
    """A value taken from another matrix's cell is detached from that matrix."""
    source = SparseMatrix(0)
    source[5][5] = 8
    target = SparseMatrix(0)
    target[0][0] = source[5][5]

    duplicate = target.copy()
    source[5][5] = 1

    assert target[0][0] == 8
    assert duplicate[0][0] == 8
    assert type(target.get((0, 0))) is int
