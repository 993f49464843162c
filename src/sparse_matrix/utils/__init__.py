from sparse_matrix.utils.indices_utils import Coordinate, normalize_coordinate, normalize_key
from sparse_matrix.utils.render_utils import format_cell, render_cells, render_window

__all__ = [
    "Coordinate",
    "normalize_coordinate",
    "normalize_key",
    "format_cell",
    "render_cells",
    "render_window",
]
