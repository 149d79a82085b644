"""Domain layer - pieces, placement, and combinatorial search."""

from .inventory import Inventory, UnknownPieceError
from .services import (
    Layout,
    ShelfPlacer,
    check_sequence,
    compact,
    dedup_key,
    deduplicate,
    distinct_orderings,
    expand_layers,
    find_layout,
    find_three_layer_solutions,
    generate_subsets,
    is_feasible,
    rank_combinations,
    redup,
)
from .value_objects import (
    CONTAINER_ID,
    Combination,
    DimensionKey,
    Piece,
    PlacedPiece,
    combination_to_string,
    make_combination,
)

__all__ = [
    "CONTAINER_ID",
    "Combination",
    "DimensionKey",
    "Inventory",
    "Layout",
    "Piece",
    "PlacedPiece",
    "ShelfPlacer",
    "UnknownPieceError",
    "check_sequence",
    "combination_to_string",
    "compact",
    "dedup_key",
    "deduplicate",
    "distinct_orderings",
    "expand_layers",
    "find_layout",
    "find_three_layer_solutions",
    "generate_subsets",
    "is_feasible",
    "make_combination",
    "rank_combinations",
    "redup",
]
