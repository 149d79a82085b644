"""Parallel feasibility checking over candidate combinations.

Candidates are consumed from one lock-guarded work queue ordered by
descending area, so the hardest candidates start first. Feasible
candidates are collected in a separately locked result set. The search
itself always runs outside both locks.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable

from rectlayers.domain import Combination, Inventory, combination_to_string, is_feasible

logger = logging.getLogger(__name__)

# Log progress every PROGRESS_INTERVAL consumed candidates.
PROGRESS_INTERVAL = 100

FeasibilityCheck = Callable[[Inventory, Combination, int], bool]


class FeasibilityCheckError(RuntimeError):
    """Raised when a worker failed while checking a candidate.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, combination: Combination | None, message: str) -> None:
        self.combination = combination
        super().__init__(message)


@dataclass(frozen=True)
class _Fault:
    worker: int
    combination: Combination
    error: Exception


class _WorkQueue:
    """Candidates still to check, a consumed counter and the first fault, under one lock."""

    def __init__(self, candidates: Iterable[Combination]) -> None:
        self._pending = deque(candidates)
        self._lock = threading.Lock()
        self._consumed = 0
        self._fault: _Fault | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def pop(self) -> tuple[int, Combination] | None:
        """Take the next candidate, or None once empty or aborted."""
        with self._lock:
            if self._fault is not None or not self._pending:
                return None
            self._consumed += 1
            return self._consumed, self._pending.popleft()

    def abort(self, worker: int, combination: Combination, error: Exception) -> None:
        """Stop handing out candidates; only the first fault is kept."""
        with self._lock:
            if self._fault is None:
                self._fault = _Fault(worker=worker, combination=combination, error=error)

    @property
    def fault(self) -> _Fault | None:
        with self._lock:
            return self._fault


class _ResultSet:
    """Feasible combinations found so far, under its own lock."""

    def __init__(self) -> None:
        self._found: set[Combination] = set()
        self._lock = threading.Lock()

    def add(self, combination: Combination) -> None:
        with self._lock:
            self._found.add(combination)

    def snapshot(self) -> set[Combination]:
        with self._lock:
            return set(self._found)


def filter_feasible(
    candidates: Iterable[Combination],
    inventory: Inventory,
    distance: int = 0,
    workers: int = 2,
    check: FeasibilityCheck = is_feasible,
) -> list[Combination]:
    """Check every candidate for feasibility using a pool of worker threads.

    Args:
        candidates: Canonical combinations to check.
        inventory: Inventory shared read-only by all workers.
        distance: Clearance passed to the placement search.
        workers: Number of worker threads.
        check: Feasibility predicate; the rotation/permutation search by default.

    Returns:
        Feasible combinations ordered by descending area, ties by ids.

    Raises:
        ValueError: If workers is less than 1.
        FeasibilityCheckError: For the first fault raised by any worker.
            Raised after every worker has stopped; no partial result is
            returned.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")

    def by_area(combination: Combination) -> tuple[int, Combination]:
        return (-inventory.area_of(combination), combination)

    queue = _WorkQueue(sorted(set(candidates), key=by_area))
    results = _ResultSet()
    total = len(queue)
    logger.info("Checking %d candidates with %d workers", total, workers)

    def work(number: int) -> int:
        logger.debug("Worker %d started", number)
        checked = 0
        while True:
            item = queue.pop()
            if item is None:
                break
            position, combination = item
            if position % PROGRESS_INTERVAL == 0:
                logger.debug(
                    "Worker %d checking candidate %d of %d: %s",
                    number,
                    position,
                    total,
                    combination_to_string(combination),
                )
            try:
                feasible = check(inventory, combination, distance)
            except Exception as e:
                logger.debug("Worker %d failed on %s", number, combination_to_string(combination))
                queue.abort(number, combination, e)
                break
            if feasible:
                results.add(combination)
            checked += 1
        logger.debug("Worker %d stopped after %d candidates", number, checked)
        return checked

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(work, number) for number in range(workers)]
    # leaving the executor joins every worker
    for future in futures:
        future.result()

    fault = queue.fault
    if fault is not None:
        raise FeasibilityCheckError(
            fault.combination,
            f"Worker {fault.worker} failed while checking "
            f"{combination_to_string(fault.combination)}: {fault.error}",
        ) from fault.error

    feasible = sorted(results.snapshot(), key=by_area)
    logger.info("Found %d feasible of %d candidates", len(feasible), total)
    return feasible
