from sparse_matrix.errors import ArityError, ChainReuseError
from sparse_matrix.structures import CellRef, CellsView, IndexBuilder, SparseMatrix
from sparse_matrix.config import MatrixConfig, MatrixConfigLoader, configure_logging

__version__ = "0.1.0"

__all__ = [
    "ArityError",
    "ChainReuseError",
    "CellRef",
    "CellsView",
    "IndexBuilder",
    "SparseMatrix",
    "MatrixConfig",
    "MatrixConfigLoader",
    "configure_logging",
]
