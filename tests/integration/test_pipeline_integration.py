"""Integration tests for the layer packing pipeline.

These tests run PipelineCommand end to end on the example inventories:
- Every stage produces the expected combinations
- The twenty piece search finds its known covering (slow)
- Stage results persisted to disk can replace the computed stages
- Settings errors stop the run before any stage
- Worker failures propagate out of the pipeline
"""

from functools import partial
from pathlib import Path

import pytest

from rectlayers.application import PipelineCommand, PipelineSettings, SearchSettings
from rectlayers.application.services import FeasibilityCheckError, filter_feasible
from rectlayers.domain import Combination, Inventory
from rectlayers.domain.services.dedup import dedup_key

EXPECTED_LAYERS = [(1, 2), (1, 5, 6), (3, 4), (3, 5, 6), (5, 6, 7, 8)]
EXPECTED_SOLUTION = ((1, 2), (3, 4), (5, 6, 7, 8))

# Three layers covering the twenty piece inventory
TWENTY_PIECE_LAYERS = (
    (1, 2, 4, 6, 7, 11, 14, 18, 19),
    (3, 5, 9, 10, 12),
    (8, 13, 15, 16, 17, 20),
)


def _settings(tmp_path: Path, **stages: bool) -> PipelineSettings:
    return PipelineSettings(
        candidates_path=tmp_path / "candidates.txt",
        deduplicated_path=tmp_path / "deduplicated.txt",
        layers_path=tmp_path / "layers.txt",
        expanded_layers_path=tmp_path / "expanded_layers.txt",
        solutions_path=tmp_path / "solutions.txt",
        ranking_path=tmp_path / "ranking.txt",
        **stages,
    )


@pytest.mark.integration
class TestPipelineStages:
    """Tests for a full in-memory pipeline run."""

    def test_every_stage(self, small_inventory: Inventory) -> None:
        result = PipelineCommand().execute(small_inventory)

        assert result.is_valid
        assert all(small_inventory.area_of(c) == 8 for c in result.candidates)
        assert result.deduplicated == [(1, 2), (1, 3), (3, 4), (1, 5, 6), (3, 5, 6), (5, 6, 7, 8)]
        assert result.layers == EXPECTED_LAYERS
        assert len(result.expanded_layers) == 27
        assert result.solutions == [EXPECTED_SOLUTION]
        assert result.ranking == [(5, 6, 7, 8), (3, 4), (1, 2)]

    def test_timings_recorded_per_stage(self, small_inventory: Inventory) -> None:
        result = PipelineCommand().execute(small_inventory)
        assert list(result.timings) == [
            "generate",
            "deduplicate",
            "feasibility",
            "matching",
            "ranking",
        ]
        assert result.total_seconds >= 0

    def test_single_worker_gives_same_layers(self, small_inventory: Inventory) -> None:
        result = PipelineCommand().execute(small_inventory, SearchSettings(workers=1))
        assert result.layers == EXPECTED_LAYERS

    def test_ranking_disabled_without_path(self, small_inventory: Inventory) -> None:
        result = PipelineCommand().execute(
            small_inventory, settings=PipelineSettings(ranking=False)
        )
        assert result.solutions == [EXPECTED_SOLUTION]
        assert result.ranking == []
        assert "ranking" in result.timings

    def test_invalid_settings_stop_the_run(self, small_inventory: Inventory) -> None:
        result = PipelineCommand().execute(small_inventory, SearchSettings(workers=0))
        assert not result.is_valid
        assert result.errors == ["Must use at least 1 worker"]
        assert result.timings == {}
        assert result.candidates == []

    @pytest.mark.slow
    def test_twenty_piece_covering_found(self, twenty_piece_inventory: Inventory) -> None:
        """The full search over the twenty piece example finds its known covering."""
        search = SearchSettings(workers=4, min_pieces=5, max_pieces=9, min_solution_area=30)
        result = PipelineCommand().execute(twenty_piece_inventory, search)

        assert result.is_valid
        expected = {dedup_key(layer, twenty_piece_inventory) for layer in TWENTY_PIECE_LAYERS}
        assert any(
            {dedup_key(layer, twenty_piece_inventory) for layer in solution} == expected
            for solution in result.solutions
        )
        for solution in result.solutions:
            ids = [piece_id for layer in solution for piece_id in layer]
            assert sorted(ids) == list(range(1, 21))


@pytest.mark.integration
class TestPipelinePersistence:
    """Tests for writing stage results and loading them back."""

    def test_every_file_written(self, tmp_path: Path, small_inventory: Inventory) -> None:
        PipelineCommand().execute(small_inventory, settings=_settings(tmp_path))
        for name in (
            "candidates.txt",
            "deduplicated.txt",
            "layers.txt",
            "expanded_layers.txt",
            "solutions.txt",
            "ranking.txt",
        ):
            assert (tmp_path / name).exists()
        assert (tmp_path / "solutions.txt").read_text(encoding="utf-8") == "1,2 3,4 5,6,7,8\n"
        assert (tmp_path / "ranking.txt").read_text(encoding="utf-8") == "5 6 7 8\n3 4\n1 2\n"

    def test_disabled_stages_load_from_files(
        self, tmp_path: Path, small_inventory: Inventory
    ) -> None:
        first = PipelineCommand().execute(small_inventory, settings=_settings(tmp_path))

        def unexpected(*args, **kwargs) -> list[Combination]:
            raise AssertionError("feasibility must not run")

        second = PipelineCommand(feasibility_filter=unexpected).execute(
            small_inventory,
            settings=_settings(tmp_path, generate=False, feasibility=False, matching=False),
        )

        assert sorted(second.candidates) == sorted(first.candidates)
        assert second.layers == first.layers
        assert second.expanded_layers == first.expanded_layers
        assert second.solutions == first.solutions
        assert second.ranking == first.ranking

    def test_disabled_ranking_loads_from_file(
        self, tmp_path: Path, small_inventory: Inventory
    ) -> None:
        """A stored ranking is read back in file order instead of being recomputed."""
        (tmp_path / "ranking.txt").write_text("3 4\n1 2\n", encoding="utf-8")

        result = PipelineCommand().execute(
            small_inventory, settings=_settings(tmp_path, ranking=False)
        )

        assert result.solutions == [EXPECTED_SOLUTION]
        assert result.ranking == [(3, 4), (1, 2)]
        assert (tmp_path / "ranking.txt").read_text(encoding="utf-8") == "3 4\n1 2\n"

    def test_missing_files_load_as_empty(self, tmp_path: Path, small_inventory: Inventory) -> None:
        result = PipelineCommand().execute(
            small_inventory,
            settings=_settings(tmp_path, generate=False, feasibility=False, matching=False),
        )
        assert result.candidates == []
        assert result.layers == []
        assert result.solutions == []


@pytest.mark.integration
class TestPipelineFailures:
    """Tests for failures raised by pipeline stages."""

    def test_worker_failure_propagates(self, small_inventory: Inventory) -> None:
        def broken(inventory: Inventory, combination: Combination, distance: int) -> bool:
            raise RuntimeError("placement crashed")

        command = PipelineCommand(feasibility_filter=partial(filter_feasible, check=broken))
        with pytest.raises(FeasibilityCheckError, match="placement crashed"):
            command.execute(small_inventory)
