"""Three-layer matching and combination ranking."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Sequence

from ..inventory import Inventory
from ..value_objects import Combination, combination_to_string
from .dedup import dedup_key, redup

logger = logging.getLogger(__name__)

Solution = tuple[Combination, Combination, Combination]


def _representative_counts(layer: Combination, inventory: Inventory) -> Counter[int]:
    return Counter(inventory.representative(piece_id) for piece_id in layer)


def _within_class_capacity(draws: Counter[int], inventory: Inventory) -> bool:
    return all(
        count <= len(inventory.class_mates(representative))
        for representative, count in draws.items()
    )


def _concrete_triple(
    first: Combination,
    second: Combination,
    third: Combination,
    inventory: Inventory,
) -> Solution | None:
    """First disjoint, fully covering substitution of the three layers."""
    required = len(inventory)
    for first_concrete in redup(first, inventory):
        committed = frozenset(first_concrete)
        for second_concrete in redup(second, inventory, committed):
            union = committed.union(second_concrete)
            for third_concrete in redup(third, inventory, union):
                if len(union) + len(third_concrete) >= required:
                    return tuple(sorted((first_concrete, second_concrete, third_concrete)))
    return None


def find_three_layer_solutions(
    layers: Iterable[Combination],
    inventory: Inventory,
) -> list[Solution]:
    """Find layer triples that are disjoint and cover the whole inventory.

    Layers are ordered by descending area and every index triple is tried.
    A triple is expanded into concrete substitutions only when its
    representative-level draws fit every equivalence class. The first
    concrete covering found for a triple is recorded.

    Args:
        layers: Feasible, usually deduplicated, layers.
        inventory: The full inventory to cover.

    Returns:
        Distinct solutions, each a sorted triple of combinations, in
        ascending order.
    """
    ordered = sorted(set(layers), key=lambda c: (-inventory.area_of(c), c))
    draws = [_representative_counts(layer, inventory) for layer in ordered]
    required = len(inventory)
    count = len(ordered)
    logger.debug("Matching %d layers against %d pieces", count, required)

    solutions: set[Solution] = set()
    for i in range(count):
        for j in range(i + 1, count):
            pair_size = len(ordered[i]) + len(ordered[j])
            pair_draws = draws[i] + draws[j]
            if not _within_class_capacity(pair_draws, inventory):
                continue
            for k in range(j + 1, count):
                if pair_size + len(ordered[k]) < required:
                    continue
                if not _within_class_capacity(pair_draws + draws[k], inventory):
                    continue
                solution = _concrete_triple(ordered[i], ordered[j], ordered[k], inventory)
                if solution is None:
                    continue
                if solution not in solutions:
                    logger.debug(
                        "Found solution %s",
                        " ".join(combination_to_string(c) for c in solution),
                    )
                solutions.add(solution)

    return sorted(solutions)


def rank_combinations(
    solutions: Iterable[Sequence[Combination]],
    inventory: Inventory,
) -> list[Combination]:
    """Order the layers used by solutions by how often their shape occurs.

    Layers are grouped by dedup key. Groups are ordered by ascending
    occurrence count, ties by key text, and each group is represented by
    the first layer seen for it.
    """
    counts: Counter[str] = Counter()
    representatives: dict[str, Combination] = {}
    for solution in solutions:
        for combination in solution:
            key = dedup_key(combination, inventory)
            representatives.setdefault(key, tuple(combination))
            counts[key] += 1

    ranked = sorted(counts, key=lambda key: (counts[key], key))
    return [representatives[key] for key in ranked]
