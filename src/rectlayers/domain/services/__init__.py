"""Domain services for placement feasibility and layer matching.

- Shelf placement and compaction of one ordered sequence
- Rotation/permutation search over a combination
- Subset enumeration with area filtering
- Deduplication and re-duplication over equivalence classes
- Three-layer matching and ranking
"""

from .dedup import dedup_key, deduplicate, expand_layers, redup
from .matching import Solution, find_three_layer_solutions, rank_combinations
from .placement import Layout, ShelfPlacer, check_sequence, compact
from .search import distinct_orderings, find_layout, is_feasible
from .subsets import default_min_solution_area, generate_subsets

__all__ = [
    "Layout",
    "ShelfPlacer",
    "Solution",
    "check_sequence",
    "compact",
    "dedup_key",
    "deduplicate",
    "default_min_solution_area",
    "distinct_orderings",
    "expand_layers",
    "find_layout",
    "find_three_layer_solutions",
    "generate_subsets",
    "is_feasible",
    "rank_combinations",
    "redup",
]
