"""Piece inventory with precomputed orientations and equivalence classes.

The inventory is built once from configuration and is read-only afterwards,
so worker threads share it without locking. Per-piece lookups go through a
dense index (position in ``pieces``) rather than a dictionary keyed by id.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .value_objects import (
    CONTAINER_ID,
    Combination,
    DimensionKey,
    Piece,
)

logger = logging.getLogger(__name__)


class UnknownPieceError(KeyError):
    """Raised when a piece id is not part of the inventory."""

    def __init__(self, piece_id: int) -> None:
        self.piece_id = piece_id
        super().__init__(piece_id)

    def __str__(self) -> str:
        return f"Unknown piece id: {self.piece_id}"


@dataclass(frozen=True)
class Inventory:
    """A container plus the pieces that may be placed inside it.

    Attributes:
        container: The container rectangle (id CONTAINER_ID).
        pieces: Inventory pieces ordered by id.
    """

    container: Piece
    pieces: tuple[Piece, ...]
    _index: dict[int, int] = field(init=False, repr=False, compare=False)
    _orientations: tuple[tuple[Piece, ...], ...] = field(
        init=False, repr=False, compare=False
    )
    _classes: tuple[tuple[int, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.container.id != CONTAINER_ID:
            raise ValueError(f"Container must use the reserved id {CONTAINER_ID}")
        ordered = tuple(sorted(self.pieces, key=lambda p: p.id))
        index: dict[int, int] = {}
        for position, piece in enumerate(ordered):
            if piece.id == CONTAINER_ID:
                raise ValueError(f"Piece id {CONTAINER_ID} is reserved for the container")
            if piece.id in index:
                raise ValueError(f"Duplicate piece id: {piece.id}")
            index[piece.id] = position

        members: dict[DimensionKey, list[int]] = defaultdict(list)
        for piece in ordered:
            members[piece.dimension_key()].append(piece.id)

        object.__setattr__(self, "pieces", ordered)
        object.__setattr__(self, "_index", index)
        object.__setattr__(
            self,
            "_orientations",
            tuple(piece.orientations(self.container) for piece in ordered),
        )
        object.__setattr__(
            self,
            "_classes",
            tuple(tuple(members[piece.dimension_key()]) for piece in ordered),
        )
        logger.debug(
            "Inventory with %d pieces in %d equivalence classes",
            len(ordered),
            len(members),
        )

    @classmethod
    def from_dimensions(
        cls,
        container: tuple[int, int],
        pieces: Iterable[tuple[int, int, int]],
    ) -> Inventory:
        """Build an inventory from plain ``(width, height)`` and ``(id, width, height)`` tuples."""
        width, height = container
        return cls(
            container=Piece(id=CONTAINER_ID, width=width, height=height),
            pieces=tuple(Piece(id=i, width=w, height=h) for i, w, h in pieces),
        )

    def __len__(self) -> int:
        return len(self.pieces)

    def __contains__(self, piece_id: object) -> bool:
        return piece_id in self._index

    @property
    def ids(self) -> Combination:
        """All piece ids in ascending order."""
        return tuple(piece.id for piece in self.pieces)

    @property
    def total_area(self) -> int:
        return sum(piece.area for piece in self.pieces)

    def index_of(self, piece_id: int) -> int:
        """Dense index of a piece id.

        Raises:
            UnknownPieceError: If the id is not in the inventory.
        """
        try:
            return self._index[piece_id]
        except KeyError:
            raise UnknownPieceError(piece_id) from None

    def get(self, piece_id: int) -> Piece:
        """Look up a piece by id."""
        return self.pieces[self.index_of(piece_id)]

    def orientations(self, piece_id: int) -> tuple[Piece, ...]:
        """Precomputed orientations of a piece that fit the container."""
        return self._orientations[self.index_of(piece_id)]

    def class_mates(self, piece_id: int) -> tuple[int, ...]:
        """Ids sharing the piece's dimension key, ascending and including itself."""
        return self._classes[self.index_of(piece_id)]

    def representative(self, piece_id: int) -> int:
        """Lowest id of the piece's equivalence class."""
        return self.class_mates(piece_id)[0]

    def equivalence_classes(self) -> dict[DimensionKey, tuple[int, ...]]:
        """All equivalence classes keyed by dimension key."""
        classes: dict[DimensionKey, tuple[int, ...]] = {}
        for piece in self.pieces:
            classes.setdefault(piece.dimension_key(), self.class_mates(piece.id))
        return classes

    def resolve(self, ids: Sequence[int]) -> tuple[Piece, ...]:
        """Map ids to pieces, failing on the first unknown id."""
        return tuple(self.get(piece_id) for piece_id in ids)

    def area_of(self, combination: Iterable[int]) -> int:
        """Total area of the pieces in a combination."""
        return sum(self.get(piece_id).area for piece_id in combination)
