"""Tests for three-layer matching and ranking."""

from __future__ import annotations

import pytest

from rectlayers.domain import Inventory
from rectlayers.domain.services.dedup import dedup_key
from rectlayers.domain.services.matching import find_three_layer_solutions, rank_combinations
from rectlayers.domain.services.search import find_layout

# Three 8x4 layers covering the twenty piece inventory
LAYER_ONE = (1, 2, 4, 6, 7, 11, 14, 18, 19)
LAYER_TWO = (3, 5, 9, 10, 12)
LAYER_THREE = (8, 13, 15, 16, 17, 20)


class TestFindThreeLayerSolutions:
    """Tests for find_three_layer_solutions."""

    def test_small_inventory(self, small_inventory: Inventory) -> None:
        layers = [(1, 2), (1, 5, 6), (3, 4), (3, 5, 6), (5, 6, 7, 8)]
        assert find_three_layer_solutions(layers, small_inventory) == [
            ((1, 2), (3, 4), (5, 6, 7, 8)),
        ]

    def test_substitutes_class_mates(self, small_inventory: Inventory) -> None:
        """Two layers sharing a representative are resolved to disjoint ids."""
        layers = [(1, 5, 6), (1, 7, 8), (3, 4)]
        assert find_three_layer_solutions(layers, small_inventory) == [
            ((1, 5, 6), (2, 7, 8), (3, 4)),
        ]

    def test_no_covering(self, small_inventory: Inventory) -> None:
        assert find_three_layer_solutions([(1, 2), (3, 4)], small_inventory) == []
        assert find_three_layer_solutions([], small_inventory) == []

    @pytest.mark.parametrize("layer", [LAYER_ONE, LAYER_TWO, LAYER_THREE])
    def test_twenty_piece_layers_fit(
        self, twenty_piece_inventory: Inventory, layer: tuple[int, ...]
    ) -> None:
        """Each layer of the twenty piece covering fits the container on its own."""
        layout = find_layout(twenty_piece_inventory, layer)
        assert layout is not None
        assert layout.is_valid()

    def test_twenty_pieces(self, twenty_piece_inventory: Inventory) -> None:
        solutions = find_three_layer_solutions(
            [LAYER_ONE, LAYER_TWO, LAYER_THREE], twenty_piece_inventory
        )
        assert len(solutions) == 1
        first, second, third = solutions[0]
        assert set(first).isdisjoint(second)
        assert set(first).isdisjoint(third)
        assert set(second).isdisjoint(third)
        assert set(first) | set(second) | set(third) == set(range(1, 21))
        keys = {dedup_key(layer, twenty_piece_inventory) for layer in solutions[0]}
        expected = {
            dedup_key(layer, twenty_piece_inventory)
            for layer in (LAYER_ONE, LAYER_TWO, LAYER_THREE)
        }
        assert keys == expected

    def test_class_capacity_prunes(self, twenty_piece_inventory: Inventory) -> None:
        """Two layers each drawing four of the five 2x1 pieces cannot combine."""
        variant = (1, 2, 4, 6, 7, 11, 14, 18, 20)
        assert find_three_layer_solutions(
            [LAYER_ONE, variant, LAYER_TWO], twenty_piece_inventory
        ) == []


class TestRankCombinations:
    """Tests for rank_combinations."""

    def test_least_frequent_first(self, twenty_piece_inventory: Inventory) -> None:
        solutions = [((1,), (2,), (3,)), ((1,), (4,), (5,))]
        assert rank_combinations(solutions, twenty_piece_inventory) == [(4,), (5,), (3,), (1,)]

    def test_empty(self, twenty_piece_inventory: Inventory) -> None:
        assert rank_combinations([], twenty_piece_inventory) == []
