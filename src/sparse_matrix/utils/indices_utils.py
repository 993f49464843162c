from __future__ import annotations
from operator import index as op_index
from typing import Any, Tuple

import numpy as np

from sparse_matrix.errors import ArityError

Coordinate = Tuple[int, ...]


def validate_ndim(ndim: Any) -> int:
    """
    Checks that `ndim` is a usable dimensionality and returns it as an int.

    Parameters
    ----------
    ndim : Any
        The requested number of dimensions.

    Returns
    -------
    int
        The validated dimensionality.

    Raises
    ------
    TypeError
        If `ndim` is not an integer (booleans are rejected).
    ValueError
        If `ndim` is smaller than 1.
    """
    if isinstance(ndim, (bool, np.bool_)):
        raise TypeError("ndim must be an integer, not a boolean")
    try:
        ndim = op_index(ndim)
    except TypeError:
        raise TypeError(f"ndim must be an integer, got {type(ndim).__name__}") from None
    if ndim < 1:
        raise ValueError(f"ndim must be >= 1, got {ndim}")
    return ndim


def normalize_component(component: Any) -> int:
    """
    Converts a single coordinate component to a non-negative Python int.

    Anything implementing `__index__` is accepted, which covers Python ints
    and numpy integer scalars. Booleans are rejected even though they are
    technically integers, since `m[True]` is almost certainly a mistake.

    Parameters
    ----------
    component : Any
        The raw index component.

    Returns
    -------
    int
        The component as a plain `int`.

    Raises
    ------
    TypeError
        If the component is a boolean or does not support `__index__`.
    ValueError
        If the component is negative.
    """
    if isinstance(component, (bool, np.bool_)):
        raise TypeError("coordinate components must be integers, not booleans")
    try:
        value = op_index(component)
    except TypeError:
        raise TypeError(
            f"coordinate components must be integers, got {type(component).__name__}"
        ) from None
    if value < 0:
        raise ValueError(f"coordinate components must be non-negative, got {value}")
    return value


def normalize_key(key: Any) -> Coordinate:
    """
    Splits an indexing key into a tuple of validated components.

    A tuple, list or 1-D numpy integer array contributes one component per
    element; any other object is treated as a single component.

    Parameters
    ----------
    key : Any
        The key passed to `__getitem__` / `__setitem__`, or a coordinate.

    Returns
    -------
    Coordinate
        The validated components, in order.

    Raises
    ------
    TypeError
        If a numpy array is not 1-D or not of an integer dtype, or if any
        component is invalid.
    """
    if isinstance(key, np.ndarray):
        if key.ndim != 1:
            raise TypeError(f"coordinate arrays must be 1-D, got {key.ndim}-D")
        if not np.issubdtype(key.dtype, np.integer):
            raise TypeError(f"coordinate arrays must have an integer dtype, got {key.dtype}")
        return tuple(normalize_component(c) for c in key.tolist())
    if isinstance(key, (tuple, list)):
        return tuple(normalize_component(c) for c in key)
    return (normalize_component(key),)


def normalize_coordinate(coord: Any, ndim: int) -> Coordinate:
    """
    Validates a full coordinate against the dimensionality of a matrix.

    Parameters
    ----------
    coord : Any
        A tuple/list/array of `ndim` components, or a bare integer when `ndim == 1`.
    ndim : int
        The matrix dimensionality.

    Returns
    -------
    Coordinate
        The coordinate as a tuple of exactly `ndim` ints.

    Raises
    ------
    ArityError
        If the coordinate does not have exactly `ndim` components.
    """
    normalized = normalize_key(coord)
    if len(normalized) != ndim:
        raise ArityError(f"expected {ndim} coordinate components, got {len(normalized)}")
    return normalized
