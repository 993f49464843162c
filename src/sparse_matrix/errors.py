class ArityError(IndexError):
    """
    Raised when an index chain is read or written with the wrong number of components.

    This covers reading or writing before all `ndim` components have been
    supplied, supplying more than `ndim` components, and passing a coordinate
    of the wrong length to `SparseMatrix.get` / `SparseMatrix.set`.
    """


class ChainReuseError(RuntimeError):
    """Raised when an `IndexBuilder` stage is indexed a second time."""
