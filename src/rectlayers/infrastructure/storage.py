"""Plain text storage for combinations, solutions and rankings.

File formats, one record per line:

- combinations: comma-separated ascending ids (``1,4,7``)
- solutions: three combinations separated by single spaces (``1,4 2,3 5,6``)
- ranking: ids separated by single spaces (``1 4 7``)

Every id read back must exist in the inventory. A missing file reads as
empty so a skipped stage without a cache simply yields no results.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from rectlayers.domain import Combination, Inventory, combination_to_string
from rectlayers.domain.services import Solution

logger = logging.getLogger(__name__)


class CombinationFormatError(ValueError):
    """Raised when a stored combination cannot be parsed or uses unknown ids.

    Attributes:
        path: File being read.
        line_number: 1-based line of the offending record.
        token: The offending text.
    """

    def __init__(self, path: Path, line_number: int, token: str, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        self.token = token
        super().__init__(f"{path}:{line_number}: {reason}: {token!r}")


def _parse_combination(
    text: str,
    separator: str | None,
    inventory: Inventory,
    path: Path,
    line_number: int,
) -> Combination:
    ids: list[int] = []
    for token in text.split(separator):
        token = token.strip()
        try:
            piece_id = int(token)
        except ValueError:
            raise CombinationFormatError(path, line_number, token, "Invalid piece id") from None
        if piece_id not in inventory:
            raise CombinationFormatError(path, line_number, token, "Unknown piece id")
        ids.append(piece_id)
    combination = tuple(sorted(ids))
    if len(set(combination)) != len(combination):
        raise CombinationFormatError(path, line_number, text, "Repeated piece id")
    return combination


def _read_lines(path: Path) -> list[tuple[int, str]]:
    if not path.exists():
        logger.debug("No stored results at %s", path)
        return []
    lines = path.read_text(encoding="utf-8").splitlines()
    return [(number, line.strip()) for number, line in enumerate(lines, start=1) if line.strip()]


def _write_lines(path: Path, lines: Iterable[str]) -> int:
    rendered = list(lines)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{line}\n" for line in rendered), encoding="utf-8")
    return len(rendered)


def write_combinations(
    path: Path,
    combinations: Iterable[Combination],
    inventory: Inventory,
) -> None:
    """Write combinations ordered by descending area, ties by ids."""
    ordered = sorted(set(combinations), key=lambda c: (-inventory.area_of(c), c))
    count = _write_lines(path, (combination_to_string(c) for c in ordered))
    logger.debug("Wrote %d combinations to %s", count, path)


def read_combinations(path: Path, inventory: Inventory) -> list[Combination]:
    """Read combinations written by write_combinations.

    Raises:
        CombinationFormatError: If a token is not an integer or an id is unknown.
    """
    combinations = [
        _parse_combination(line, ",", inventory, path, number)
        for number, line in _read_lines(path)
    ]
    logger.debug("Read %d combinations from %s", len(combinations), path)
    return combinations


def write_solutions(path: Path, solutions: Iterable[Sequence[Combination]]) -> None:
    lines = (" ".join(combination_to_string(c) for c in solution) for solution in solutions)
    count = _write_lines(path, lines)
    logger.debug("Wrote %d solutions to %s", count, path)


def read_solutions(path: Path, inventory: Inventory) -> list[Solution]:
    """Read three-layer solutions.

    Raises:
        CombinationFormatError: If a line does not hold exactly three
            combinations, or on any invalid or unknown id.
    """
    solutions: list[Solution] = []
    for number, line in _read_lines(path):
        parts = line.split()
        if len(parts) != 3:
            raise CombinationFormatError(path, number, line, "Expected three combinations")
        first, second, third = sorted(
            _parse_combination(part, ",", inventory, path, number) for part in parts
        )
        solutions.append((first, second, third))
    logger.debug("Read %d solutions from %s", len(solutions), path)
    return solutions


def write_ranking(path: Path, ranking: Iterable[Combination]) -> None:
    count = _write_lines(path, (combination_to_string(c, " ") for c in ranking))
    logger.debug("Wrote %d ranked combinations to %s", count, path)


def read_ranking(path: Path, inventory: Inventory) -> list[Combination]:
    """Read a ranking, preserving its order."""
    return [
        _parse_combination(line, None, inventory, path, number)
        for number, line in _read_lines(path)
    ]
