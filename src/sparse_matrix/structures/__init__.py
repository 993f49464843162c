from sparse_matrix.structures.index_builder import CellRef, IndexBuilder
from sparse_matrix.structures.sparse_matrix import CellsView, SparseMatrix

__all__ = [
    "CellRef",
    "CellsView",
    "IndexBuilder",
    "SparseMatrix",
]
