"""Shelf placement and compaction for one fully ordered piece sequence.

The shelf engine walks the sequence left to right, wrapping to a new row
whenever the accumulated piece widths would overflow the container. Two
column height maps are kept: one including the clearance gaps between rows
and one without. The gapped map decides where pieces are drawn; the
gap-free map decides whether the rows fit the container height.

A feasible shelf layout is then compacted toward the origin and checked
against the container bounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..value_objects import Piece, PlacedPiece

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layout:
    """A feasible placement of a piece sequence inside a container.

    Attributes:
        container: The container the pieces were placed in.
        placements: Placed pieces in placement order.
    """

    container: Piece
    placements: tuple[PlacedPiece, ...]

    @property
    def ids(self) -> tuple[int, ...]:
        """Placed piece ids in ascending order."""
        return tuple(sorted(p.piece.id for p in self.placements))

    @property
    def used_area(self) -> int:
        return sum(p.piece.area for p in self.placements)

    @property
    def waste_percentage(self) -> float:
        """Percentage of the container area left empty."""
        return (1 - self.used_area / self.container.area) * 100

    def is_valid(self) -> bool:
        """Check that no two pieces collide and every piece is in bounds."""
        placements = self.placements
        for i, placed in enumerate(placements):
            if not placed.within(self.container):
                return False
            for other in placements[i + 1 :]:
                if placed.collides_with(other):
                    return False
        return True


class ShelfPlacer:
    """Greedy skyline/shelf placement of an ordered, oriented sequence.

    Attributes:
        container: Container the pieces must fit inside.
        distance: Clearance inserted between neighbouring pieces and rows.
    """

    def __init__(self, container: Piece, distance: int = 0) -> None:
        if distance < 0:
            raise ValueError("Distance must be non-negative")
        self.container = container
        self.distance = distance

    def place(self, sequence: Sequence[Piece]) -> list[PlacedPiece] | None:
        """Place the pieces exactly in the given order and orientation.

        Args:
            sequence: Oriented pieces in placement order.

        Returns:
            The shelf placements, or None when a height bound is exceeded.
        """
        container_width = self.container.width
        container_height = self.container.height
        distance = self.distance

        if any(not piece.fits_within(self.container) for piece in sequence):
            return None

        columns = container_width + len(sequence) * distance
        taken_with_gaps = np.zeros(columns, dtype=np.int64)
        taken = np.zeros(columns, dtype=np.int64)

        placements: list[PlacedPiece] = []
        x_with_gaps = 0
        x_row = 0
        for piece in sequence:
            if x_row + piece.width > container_width:
                x_row = 0
                x_with_gaps = 0
                if taken.max() > container_height:
                    return None

            span = slice(x_with_gaps, x_with_gaps + piece.width)
            y_with_gaps = int(taken_with_gaps[span].max())
            y = int(taken[span].max())
            # first row sits on the floor without a gap
            if y_with_gaps > 0:
                y_with_gaps += distance

            placements.append(PlacedPiece(piece=piece, x=x_with_gaps, y=y_with_gaps))
            taken_with_gaps[span] = y_with_gaps + piece.height
            taken[span] = y + piece.height

            x_with_gaps += piece.width + distance
            x_row += piece.width

        if taken.max() > container_height:
            return None
        return placements


def compact(placements: Sequence[PlacedPiece]) -> list[PlacedPiece]:
    """Slide every piece toward the origin until nothing can move.

    Each piece repeatedly tries unit steps diagonally (while both
    coordinates are positive), then along x, then along y, reverting any
    step that causes a collision. Passes over all pieces repeat while any
    piece moved. Coordinates only decrease, so the loop terminates.

    Args:
        placements: Placed pieces with distinct ids.

    Returns:
        New placements in the same order.
    """
    pieces = [p.piece for p in placements]
    xs = [p.x for p in placements]
    ys = [p.y for p in placements]
    rights = [p.right_edge for p in placements]
    tops = [p.top_edge for p in placements]
    count = len(pieces)

    def collides(index: int, x: int, y: int) -> bool:
        right = x + pieces[index].width
        top = y + pieces[index].height
        for other in range(count):
            if other == index:
                continue
            if x < rights[other] and xs[other] < right and y < tops[other] and ys[other] < top:
                return True
        return False

    def settle(index: int) -> bool:
        moved_at_all = False
        moved = True
        while moved:
            moved = False
            x, y = xs[index], ys[index]
            while x > 0 and y > 0 and not collides(index, x - 1, y - 1):
                x -= 1
                y -= 1
                moved = True
            while x > 0 and not collides(index, x - 1, y):
                x -= 1
                moved = True
            while y > 0 and not collides(index, x, y - 1):
                y -= 1
                moved = True
            xs[index], ys[index] = x, y
            rights[index] = x + pieces[index].width
            tops[index] = y + pieces[index].height
            moved_at_all = moved_at_all or moved
        return moved_at_all

    passes = 0
    moved_during_pass = True
    while moved_during_pass:
        moved_during_pass = False
        for index in range(count):
            if settle(index):
                moved_during_pass = True
        passes += 1

    logger.debug("Compaction settled %d pieces after %d passes", count, passes)
    return [PlacedPiece(piece=pieces[i], x=xs[i], y=ys[i]) for i in range(count)]


def check_sequence(
    sequence: Sequence[Piece],
    container: Piece,
    distance: int = 0,
) -> Layout | None:
    """Decide feasibility of one fully ordered, fully oriented sequence.

    Runs the shelf placement, compacts the result, and verifies that every
    compacted piece lies inside the container.

    Args:
        sequence: Oriented pieces in placement order.
        container: Container to place the pieces in.
        distance: Clearance used while building the shelf layout.

    Returns:
        The compacted layout, or None when the sequence does not fit.
    """
    shelf = ShelfPlacer(container, distance).place(sequence)
    if shelf is None:
        return None
    compacted = compact(shelf)
    if not all(p.within(container) for p in compacted):
        return None
    return Layout(container=container, placements=tuple(compacted))
