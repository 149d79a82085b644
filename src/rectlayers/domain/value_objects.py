"""Core value objects for the layer packing domain.

Pieces, placed pieces, and the combination helpers shared by every stage.
All dataclasses are frozen (immutable) so they can be shared freely between
worker threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

# Id reserved for the container itself. Inventory pieces never use it.
CONTAINER_ID = -1

# Dimensions at or above this value are rounded down to a multiple of
# DIMENSION_KEY_STEP when computing equivalence keys.
DIMENSION_KEY_THRESHOLD = 100
DIMENSION_KEY_STEP = 10

# A combination is a canonical (ascending, duplicate free) tuple of piece ids.
Combination = tuple[int, ...]

# Coarse (major, minor) footprint used to group near-identical pieces.
DimensionKey = tuple[int, int]


@dataclass(frozen=True, eq=False)
class Piece:
    """A rectangular piece with a stable identity.

    Equality and hashing use the id only; the footprint takes part in
    ordering as a tie-break so a piece and its rotation sort deterministically.

    Attributes:
        id: Small integer identity. CONTAINER_ID denotes the container.
        width: Horizontal extent in the configured unit.
        height: Vertical extent in the configured unit.
    """

    id: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: Piece) -> bool:
        return self.sort_key < other.sort_key

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.id, self.width, self.height)

    @property
    def area(self) -> int:
        """Area covered by the piece."""
        return self.width * self.height

    @property
    def footprint(self) -> tuple[int, int]:
        """Oriented (width, height) pair."""
        return (self.width, self.height)

    @property
    def is_container(self) -> bool:
        return self.id == CONTAINER_ID

    def rotated(self) -> Piece:
        """Return the same piece turned by 90 degrees."""
        return Piece(id=self.id, width=self.height, height=self.width)

    def fits_within(self, container: Piece) -> bool:
        """Check whether this footprint fits the container without rotating."""
        return self.width <= container.width and self.height <= container.height

    def orientations(self, container: Piece) -> tuple[Piece, ...]:
        """Footprints of this piece that individually fit the container.

        The original footprint comes first. A square piece has a single
        orientation because its rotation is indistinguishable.

        Args:
            container: The container the piece must fit inside.

        Returns:
            Tuple with zero, one, or two oriented pieces.
        """
        found: list[Piece] = []
        if self.fits_within(container):
            found.append(self)
        if self.width != self.height:
            turned = self.rotated()
            if turned.fits_within(container):
                found.append(turned)
        return tuple(found)

    def dimension_key(self) -> DimensionKey:
        """Coarse (major, minor) key grouping near-identical shapes.

        Each dimension at or above 100 is rounded down to a multiple of 10;
        the larger value comes first so rotations share a key.
        """
        first = _coarsen(self.height)
        second = _coarsen(self.width)
        if first > second:
            return (first, second)
        return (second, first)


def _coarsen(value: int) -> int:
    if value >= DIMENSION_KEY_THRESHOLD:
        return (value // DIMENSION_KEY_STEP) * DIMENSION_KEY_STEP
    return value


@dataclass(frozen=True)
class PlacedPiece:
    """An oriented piece placed at a position inside the container.

    Coordinates are measured from the bottom-left corner of the container.
    The piece occupies the integer cells ``[x, x + width - 1]`` by
    ``[y, y + height - 1]``.

    Attributes:
        piece: The oriented piece being placed.
        x: Horizontal position of the left edge.
        y: Vertical position of the bottom edge.
    """

    piece: Piece
    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def right_edge(self) -> int:
        """X coordinate just past the piece."""
        return self.x + self.piece.width

    @property
    def top_edge(self) -> int:
        """Y coordinate just past the piece."""
        return self.y + self.piece.height

    def collides_with(self, other: PlacedPiece) -> bool:
        """Check whether two placed pieces share at least one cell.

        Pieces with the same id never collide with each other.
        """
        if self.piece.id == other.piece.id:
            return False
        return (
            self.x < other.right_edge
            and other.x < self.right_edge
            and self.y < other.top_edge
            and other.y < self.top_edge
        )

    def within(self, container: Piece) -> bool:
        """Check whether the piece lies completely inside the container."""
        return self.right_edge <= container.width and self.top_edge <= container.height


def make_combination(ids: Iterable[int]) -> Combination:
    """Build the canonical combination for a collection of piece ids.

    Raises:
        ValueError: If an id appears more than once.
    """
    ordered = tuple(sorted(ids))
    if len(set(ordered)) != len(ordered):
        raise ValueError(f"Combination contains repeated ids: {ordered}")
    return ordered


def combination_to_string(combination: Sequence[int], separator: str = ",") -> str:
    """Render a combination as separator-joined ids."""
    return separator.join(str(piece_id) for piece_id in combination)
