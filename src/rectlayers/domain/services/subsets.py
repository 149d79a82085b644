"""Candidate subset enumeration with area pre-filtering."""

from __future__ import annotations

import itertools
import logging

from ..inventory import Inventory
from ..value_objects import Combination

logger = logging.getLogger(__name__)


def default_min_solution_area(inventory: Inventory) -> int:
    """Smallest area a layer of a three-layer covering can have.

    The two other layers hold at most one container area each, so any
    layer of a covering must reach the remainder.
    """
    return max(1, inventory.total_area - 2 * inventory.container.area)


def generate_subsets(
    inventory: Inventory,
    min_pieces: int = 1,
    max_pieces: int | None = None,
    min_solution_area: int | None = None,
) -> list[Combination]:
    """Enumerate inventory subsets that could form a layer.

    Subsets are produced by size (ascending) and, within one size, in
    lexicographic id order. A subset is kept when its total area is at most
    the container area and at least the minimum solution area.

    Args:
        inventory: The inventory to draw pieces from.
        min_pieces: Smallest subset size.
        max_pieces: Largest subset size; defaults to the inventory size.
        min_solution_area: Area floor; derived from the inventory when None.

    Returns:
        The filtered subsets as canonical combinations.

    Raises:
        ValueError: If the size range is invalid.
    """
    if min_pieces < 1:
        raise ValueError("min_pieces must be at least 1")
    if max_pieces is None:
        max_pieces = len(inventory)
    if max_pieces < min_pieces:
        raise ValueError("max_pieces must be greater than or equal to min_pieces")
    if min_solution_area is None:
        min_solution_area = default_min_solution_area(inventory)

    container_area = inventory.container.area
    areas = {piece.id: piece.area for piece in inventory.pieces}
    upper = min(max_pieces, len(inventory))

    enumerated = 0
    subsets: list[Combination] = []
    for size in range(min_pieces, upper + 1):
        for combination in itertools.combinations(inventory.ids, size):
            enumerated += 1
            area = sum(areas[piece_id] for piece_id in combination)
            if min_solution_area <= area <= container_area:
                subsets.append(combination)

    logger.debug(
        "Kept %d of %d subsets with area in [%d, %d]",
        len(subsets),
        enumerated,
        min_solution_area,
        container_area,
    )
    return subsets
