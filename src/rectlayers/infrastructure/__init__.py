"""Infrastructure layer - file storage and rendering."""

from .layout_renderer import LayoutRenderer
from .storage import (
    CombinationFormatError,
    read_combinations,
    read_ranking,
    read_solutions,
    write_combinations,
    write_ranking,
    write_solutions,
)

__all__ = [
    "CombinationFormatError",
    "LayoutRenderer",
    "read_combinations",
    "read_ranking",
    "read_solutions",
    "write_combinations",
    "write_ranking",
    "write_solutions",
]
