"""Application commands (use cases) for layer packing runs."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

from rectlayers.domain import (
    Combination,
    Inventory,
    Layout,
    deduplicate,
    expand_layers,
    find_layout,
    find_three_layer_solutions,
    generate_subsets,
    make_combination,
    rank_combinations,
)
from rectlayers.infrastructure.storage import (
    read_combinations,
    read_ranking,
    read_solutions,
    write_combinations,
    write_ranking,
    write_solutions,
)

from .dtos import PipelineResult, PipelineSettings, SearchSettings
from .services.feasibility import filter_feasible

logger = logging.getLogger(__name__)

FeasibilityFilter = Callable[..., list[Combination]]


@dataclass
class PipelineState:
    """Everything one pipeline run reads and produces."""

    inventory: Inventory
    search: SearchSettings
    settings: PipelineSettings
    result: PipelineResult = field(default_factory=PipelineResult)


@contextmanager
def _stage(state: PipelineState, name: str) -> Iterator[None]:
    logger.info("Stage %s started", name)
    start = time.perf_counter()
    yield
    elapsed = time.perf_counter() - start
    state.result.timings[name] = elapsed
    logger.info("Stage %s finished in %.2f seconds", name, elapsed)


class PipelineCommand:
    """Command running the layer packing pipeline.

    Stages run in order: generate, deduplicate, feasibility, matching,
    ranking. A disabled stage loads its result from its configured path
    instead; an enabled stage writes its result there when a path is set.
    """

    def __init__(self, feasibility_filter: FeasibilityFilter | None = None) -> None:
        self.feasibility_filter = feasibility_filter or filter_feasible

    def execute(
        self,
        inventory: Inventory,
        search: SearchSettings | None = None,
        settings: PipelineSettings | None = None,
    ) -> PipelineResult:
        """Execute every pipeline stage.

        Args:
            inventory: Container and pieces to work on.
            search: Search settings; defaults when None.
            settings: Stage switches and paths; all stages computed and
                nothing persisted when None.

        Returns:
            PipelineResult with each stage's output and timing. Settings
            problems are reported in ``errors`` and no stage runs.

        Raises:
            CombinationFormatError: If a loaded file is malformed.
            FeasibilityCheckError: If a feasibility worker failed.
        """
        search = search or SearchSettings()
        settings = settings or PipelineSettings()
        state = PipelineState(inventory=inventory, search=search, settings=settings)

        errors = search.validate()
        if errors:
            state.result.errors = errors
            return state.result

        logger.info(
            "Running pipeline for %d pieces (total area %d, three containers %d)",
            len(inventory),
            inventory.total_area,
            3 * inventory.container.area,
        )
        self.generate(state)
        self.deduplicate(state)
        self.feasibility(state)
        self.matching(state)
        self.ranking(state)
        logger.info("Pipeline finished in %.2f seconds", state.result.total_seconds)
        return state.result

    def generate(self, state: PipelineState) -> None:
        result = state.result
        path = state.settings.candidates_path
        with _stage(state, "generate"):
            if state.settings.generate:
                result.candidates = generate_subsets(
                    state.inventory,
                    min_pieces=state.search.min_pieces,
                    max_pieces=state.search.max_pieces,
                    min_solution_area=state.search.min_solution_area,
                )
                self._persist_combinations(path, result.candidates, state.inventory)
            else:
                result.candidates = self._load_combinations(path, state.inventory)
        logger.info("%d candidates", len(result.candidates))

    def deduplicate(self, state: PipelineState) -> None:
        result = state.result
        with _stage(state, "deduplicate"):
            result.deduplicated = deduplicate(result.candidates, state.inventory)
            self._persist_combinations(
                state.settings.deduplicated_path, result.deduplicated, state.inventory
            )
        logger.info("%d deduplicated candidates", len(result.deduplicated))

    def feasibility(self, state: PipelineState) -> None:
        result = state.result
        settings = state.settings
        with _stage(state, "feasibility"):
            if settings.feasibility:
                result.layers = self.feasibility_filter(
                    result.deduplicated,
                    state.inventory,
                    distance=state.search.distance,
                    workers=state.search.workers,
                )
                self._persist_combinations(settings.layers_path, result.layers, state.inventory)
            else:
                result.layers = self._load_combinations(settings.layers_path, state.inventory)
            result.expanded_layers = expand_layers(result.layers, state.inventory)
            self._persist_combinations(
                settings.expanded_layers_path, result.expanded_layers, state.inventory
            )
        logger.info(
            "%d feasible layers (%d concrete)",
            len(result.layers),
            len(result.expanded_layers),
        )

    def matching(self, state: PipelineState) -> None:
        result = state.result
        path = state.settings.solutions_path
        with _stage(state, "matching"):
            if state.settings.matching:
                result.solutions = find_three_layer_solutions(result.layers, state.inventory)
                if path is not None:
                    write_solutions(path, result.solutions)
            elif path is not None:
                result.solutions = read_solutions(path, state.inventory)
        logger.info("%d three-layer solutions", len(result.solutions))

    def ranking(self, state: PipelineState) -> None:
        result = state.result
        path = state.settings.ranking_path
        with _stage(state, "ranking"):
            if state.settings.ranking:
                result.ranking = rank_combinations(result.solutions, state.inventory)
                if path is not None:
                    write_ranking(path, result.ranking)
            elif path is not None:
                result.ranking = read_ranking(path, state.inventory)
        logger.info("%d ranked combinations", len(result.ranking))

    @staticmethod
    def _persist_combinations(
        path: Path | None,
        combinations: list[Combination],
        inventory: Inventory,
    ) -> None:
        if path is not None:
            write_combinations(path, combinations, inventory)

    @staticmethod
    def _load_combinations(path: Path | None, inventory: Inventory) -> list[Combination]:
        if path is None:
            return []
        return read_combinations(path, inventory)


class CheckCombinationCommand:
    """Command deciding feasibility of a single combination."""

    def execute(
        self,
        inventory: Inventory,
        ids: list[int],
        distance: int = 0,
    ) -> Layout | None:
        """Search orientations and orderings of the given ids.

        Raises:
            ValueError: If ids repeat.
            UnknownPieceError: If an id is not in the inventory.
        """
        combination = make_combination(ids)
        inventory.resolve(combination)
        return find_layout(inventory, combination, distance)
