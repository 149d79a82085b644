"""Deduplication and re-duplication across dimension-equivalence classes.

Pieces sharing a dimension key are interchangeable for feasibility, so only
one combination per shape pattern needs an expensive placement check. Redup
is the inverse: it expands a representative combination back into every
concrete combination obtainable by swapping members for class-mates.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable

from ..inventory import Inventory
from ..value_objects import Combination

logger = logging.getLogger(__name__)


def dedup_key(combination: Iterable[int], inventory: Inventory) -> str:
    """Shape pattern key of a combination.

    Each member contributes its ``"major,minor"`` dimension key; the member
    keys are sorted so the result does not depend on member order.

    Raises:
        UnknownPieceError: If a member is not in the inventory.
    """
    keys = sorted(inventory.get(piece_id).dimension_key() for piece_id in combination)
    return " ".join(f"{major},{minor}" for major, minor in keys)


def deduplicate(
    candidates: Iterable[Combination],
    inventory: Inventory,
) -> list[Combination]:
    """Keep one combination per dedup key.

    Candidates are ordered by the sum of their ids, then by the ids
    themselves, and the first candidate of each key is kept.

    Args:
        candidates: Canonical combinations, possibly sharing shape patterns.
        inventory: Inventory used to compute dimension keys.

    Returns:
        The retained representatives in that order.
    """
    ordered = sorted(set(candidates), key=lambda c: (sum(c), c))
    seen: set[str] = set()
    kept: list[Combination] = []
    for combination in ordered:
        key = dedup_key(combination, inventory)
        if key in seen:
            continue
        seen.add(key)
        kept.append(combination)

    logger.debug("Deduplicated %d candidates to %d", len(ordered), len(kept))
    return kept


def redup(
    combination: Combination,
    inventory: Inventory,
    committed: AbstractSet[int] = frozenset(),
) -> list[Combination]:
    """Expand a combination into every concrete class-mate substitution.

    Every member may be replaced by any class-mate (itself included) that is
    neither committed elsewhere nor already used by another member of the
    same expansion. The last member is removed, the remainder is expanded
    recursively, and each remainder expansion is extended with every valid
    class-mate of the removed member. A single member expands to one
    singleton per available class-mate.

    Args:
        combination: Canonical combination to expand.
        inventory: Inventory providing the equivalence classes.
        committed: Ids already assigned elsewhere.

    Returns:
        Distinct canonical combinations in ascending order. Empty when no
        valid substitution exists.
    """
    if not combination:
        return []

    *rest, last = combination
    mates = [m for m in inventory.class_mates(last) if m not in committed]
    if not rest:
        return [(mate,) for mate in mates]

    expanded: set[Combination] = set()
    for partial in redup(tuple(rest), inventory, committed):
        for mate in mates:
            if mate in partial:
                continue
            expanded.add(tuple(sorted((*partial, mate))))
    return sorted(expanded)


def expand_layers(
    layers: Iterable[Combination],
    inventory: Inventory,
) -> list[Combination]:
    """Re-inflate deduplicated layers into all concrete layers they stand for."""
    expanded: set[Combination] = set()
    for layer in layers:
        expanded.update(redup(layer, inventory))
    return sorted(expanded)
