"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rectlayers.domain import Combination
from rectlayers.domain.services import Solution


@dataclass(frozen=True)
class SearchSettings:
    """Settings for candidate generation and feasibility checking."""

    workers: int = 2
    min_pieces: int = 1
    max_pieces: int = 100
    min_solution_area: int | None = None
    distance: int = 0

    def validate(self) -> list[str]:
        """Validate settings and return list of error messages."""
        errors: list[str] = []
        if self.workers < 1:
            errors.append("Must use at least 1 worker")
        if self.min_pieces < 1:
            errors.append("Minimum pieces must be at least 1")
        if self.max_pieces < self.min_pieces:
            errors.append("Maximum pieces must not be below minimum pieces")
        if self.min_solution_area is not None and self.min_solution_area < 0:
            errors.append("Minimum solution area cannot be negative")
        if self.distance < 0:
            errors.append("Distance cannot be negative")
        return errors


@dataclass(frozen=True)
class PipelineSettings:
    """Stage switches and the files each stage reads from or writes to."""

    generate: bool = True
    feasibility: bool = True
    matching: bool = True
    ranking: bool = True
    candidates_path: Path | None = None
    deduplicated_path: Path | None = None
    layers_path: Path | None = None
    expanded_layers_path: Path | None = None
    solutions_path: Path | None = None
    ranking_path: Path | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline run: every stage's result and its timing.

    Attributes:
        candidates: Generated or loaded candidate combinations.
        deduplicated: One candidate per shape pattern.
        layers: Feasible deduplicated combinations.
        expanded_layers: Every concrete combination the layers stand for.
        solutions: Three-layer coverings.
        ranking: Combinations used by solutions, least frequent first.
        timings: Elapsed seconds per stage that ran or loaded.
        errors: Settings problems that stopped the run before any stage.
    """

    candidates: list[Combination] = field(default_factory=list)
    deduplicated: list[Combination] = field(default_factory=list)
    layers: list[Combination] = field(default_factory=list)
    expanded_layers: list[Combination] = field(default_factory=list)
    solutions: list[Solution] = field(default_factory=list)
    ranking: list[Combination] = field(default_factory=list)
    timings: dict[str, float] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def total_seconds(self) -> float:
        return sum(self.timings.values())

    @property
    def is_valid(self) -> bool:
        return not self.errors
