"""Rotation and permutation search for a single combination.

A combination is feasible when at least one choice of orientations and one
ordering of the oriented pieces passes the shelf placement and compaction.
This is a decision procedure: the first feasible layout wins.
"""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from typing import Iterator, Sequence

from ..inventory import Inventory
from ..value_objects import Combination, Piece, combination_to_string
from .placement import Layout, check_sequence

logger = logging.getLogger(__name__)


def distinct_orderings(pieces: Sequence[Piece]) -> Iterator[tuple[Piece, ...]]:
    """Yield every ordering of the pieces that the shelf engine can tell apart.

    Pieces with identical footprints are interchangeable, so orderings are
    generated over the multiset of footprints in lexicographic order, and
    pieces sharing a footprint fill its slots in their input order.

    Args:
        pieces: Oriented pieces to order.

    Yields:
        Tuples of pieces, one per distinct footprint sequence.
    """
    by_footprint: dict[tuple[int, int], list[Piece]] = defaultdict(list)
    for piece in pieces:
        by_footprint[piece.footprint].append(piece)

    keys = sorted(piece.footprint for piece in pieces)
    size = len(keys)
    while True:
        cursors = dict.fromkeys(by_footprint, 0)
        ordering = []
        for key in keys:
            ordering.append(by_footprint[key][cursors[key]])
            cursors[key] += 1
        yield tuple(ordering)

        # advance to the next lexicographic permutation of the footprints
        pivot = size - 2
        while pivot >= 0 and keys[pivot] >= keys[pivot + 1]:
            pivot -= 1
        if pivot < 0:
            return
        successor = size - 1
        while keys[successor] <= keys[pivot]:
            successor -= 1
        keys[pivot], keys[successor] = keys[successor], keys[pivot]
        keys[pivot + 1 :] = reversed(keys[pivot + 1 :])


def find_layout(
    inventory: Inventory,
    combination: Combination,
    distance: int = 0,
) -> Layout | None:
    """Search all orientations and orderings of a combination for a layout.

    Args:
        inventory: Inventory providing pieces and their orientation sets.
        combination: Piece ids to place together.
        distance: Clearance used by the shelf placement.

    Returns:
        The first feasible layout found, or None if none exists.

    Raises:
        UnknownPieceError: If the combination references an unknown id.
    """
    orientation_sets = [inventory.orientations(piece_id) for piece_id in combination]
    if any(not options for options in orientation_sets):
        logger.debug(
            "Combination %s has a piece that fits in no orientation",
            combination_to_string(combination),
        )
        return None

    checked = 0
    for oriented in itertools.product(*orientation_sets):
        for ordering in distinct_orderings(oriented):
            checked += 1
            layout = check_sequence(ordering, inventory.container, distance)
            if layout is not None:
                logger.debug(
                    "Combination %s fits after %d orderings",
                    combination_to_string(combination),
                    checked,
                )
                return layout

    logger.debug(
        "Combination %s does not fit (%d orderings checked)",
        combination_to_string(combination),
        checked,
    )
    return None


def is_feasible(inventory: Inventory, combination: Combination, distance: int = 0) -> bool:
    """Check whether a combination can be placed inside the container."""
    return find_layout(inventory, combination, distance) is not None
