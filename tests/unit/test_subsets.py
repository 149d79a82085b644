"""Tests for candidate subset generation."""

from __future__ import annotations

import pytest

from rectlayers.domain import Inventory
from rectlayers.domain.services.subsets import default_min_solution_area, generate_subsets


@pytest.fixture
def tiny_inventory() -> Inventory:
    """A 2x2 container with pieces of area 1, 1, 2 and 4."""
    return Inventory.from_dimensions(
        container=(2, 2),
        pieces=[(1, 1, 1), (2, 1, 1), (3, 2, 1), (4, 2, 2)],
    )


class TestDefaultMinSolutionArea:
    """Tests for default_min_solution_area."""

    def test_remainder_after_two_containers(self, small_inventory: Inventory) -> None:
        assert default_min_solution_area(small_inventory) == 8

    def test_never_below_one(self, nine_piece_inventory: Inventory) -> None:
        assert default_min_solution_area(nine_piece_inventory) == 1


class TestGenerateSubsets:
    """Tests for generate_subsets."""

    def test_defaults(self, tiny_inventory: Inventory) -> None:
        """Subsets come by size, then in lexicographic order."""
        assert generate_subsets(tiny_inventory) == [
            (1,),
            (2,),
            (3,),
            (4,),
            (1, 2),
            (1, 3),
            (2, 3),
            (1, 2, 3),
        ]

    def test_min_solution_area(self, tiny_inventory: Inventory) -> None:
        assert generate_subsets(tiny_inventory, min_solution_area=3) == [
            (4,),
            (1, 3),
            (2, 3),
            (1, 2, 3),
        ]

    def test_size_range(self, tiny_inventory: Inventory) -> None:
        assert generate_subsets(tiny_inventory, min_pieces=2, max_pieces=2) == [
            (1, 2),
            (1, 3),
            (2, 3),
        ]

    def test_max_pieces_is_clamped_to_inventory(self, tiny_inventory: Inventory) -> None:
        assert generate_subsets(tiny_inventory, max_pieces=100) == generate_subsets(tiny_inventory)

    def test_areas_are_within_bounds(self, small_inventory: Inventory) -> None:
        for subset in generate_subsets(small_inventory):
            assert 8 <= small_inventory.area_of(subset) <= 8

    def test_min_pieces_below_one_raises(self, tiny_inventory: Inventory) -> None:
        with pytest.raises(ValueError, match="min_pieces"):
            generate_subsets(tiny_inventory, min_pieces=0)

    def test_max_below_min_raises(self, tiny_inventory: Inventory) -> None:
        with pytest.raises(ValueError, match="max_pieces"):
            generate_subsets(tiny_inventory, min_pieces=3, max_pieces=2)

    def test_nothing_fits(self) -> None:
        inventory = Inventory.from_dimensions(container=(1, 1), pieces=[(1, 2, 2)])
        assert generate_subsets(inventory) == []
