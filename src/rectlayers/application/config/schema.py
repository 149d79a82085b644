"""Pydantic configuration schema models for layer packing runs.

This module defines the configuration schema for JSON-based run
configuration files. It uses Pydantic v2 for validation and serialization.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rectlayers.domain.value_objects import CONTAINER_ID

# Supported schema versions for configuration files
# Version 1.0: Initial schema with container, pieces, search and pipeline
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class ContainerConfig(BaseModel):
    """Container dimensions in the configured unit.

    Attributes:
        width: Horizontal extent of the container.
        height: Vertical extent of the container.
    """

    model_config = ConfigDict(extra="forbid")

    width: int = Field(..., gt=0, description="Container width")
    height: int = Field(..., gt=0, description="Container height")


class PieceConfig(BaseModel):
    """One inventory piece."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="Unique piece id")
    width: int = Field(..., gt=0, description="Piece width")
    height: int = Field(..., gt=0, description="Piece height")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        """Reject the id reserved for the container."""
        if v == CONTAINER_ID:
            raise ValueError(f"Piece id {CONTAINER_ID} is reserved for the container")
        return v


class SearchConfig(BaseModel):
    """Search settings.

    Attributes:
        workers: Number of feasibility worker threads.
        min_pieces: Smallest candidate subset size.
        max_pieces: Largest candidate subset size.
        min_solution_area: Area floor for candidates; derived when null.
        distance: Clearance between neighbouring pieces.
    """

    model_config = ConfigDict(extra="forbid")

    workers: int = Field(default=2, ge=1, description="Worker thread count")
    min_pieces: int = Field(default=1, ge=1, description="Minimum pieces per layer")
    max_pieces: int = Field(default=100, ge=1, description="Maximum pieces per layer")
    min_solution_area: int | None = Field(
        default=None,
        ge=0,
        description="Minimum total area of a layer (derived when omitted)",
    )
    distance: int = Field(default=0, ge=0, description="Clearance between pieces")

    @model_validator(mode="after")
    def validate_piece_range(self) -> "SearchConfig":
        """Validate that the subset size range is not empty."""
        if self.max_pieces < self.min_pieces:
            raise ValueError(
                f"max_pieces ({self.max_pieces}) must be greater than or equal to "
                f"min_pieces ({self.min_pieces})"
            )
        return self


class StagesConfig(BaseModel):
    """Which pipeline stages are computed rather than loaded from file."""

    model_config = ConfigDict(extra="forbid")

    generate: bool = True
    feasibility: bool = True
    matching: bool = True
    ranking: bool = True


class PipelineConfig(BaseModel):
    """Pipeline stage switches and the files each stage reads or writes.

    A disabled stage loads its result from its path; an enabled stage
    writes its result to its path when one is configured.
    """

    model_config = ConfigDict(extra="forbid")

    stages: StagesConfig = Field(default_factory=StagesConfig)
    candidates_path: str | None = None
    deduplicated_path: str | None = None
    layers_path: str | None = None
    expanded_layers_path: str | None = None
    solutions_path: str | None = None
    ranking_path: str | None = None


class LayerPackingConfiguration(BaseModel):
    """Root configuration model for a layer packing run.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        container: Container dimensions
        pieces: Inventory pieces, at least one, with unique ids
        search: Search settings
        pipeline: Pipeline stage switches and file paths

    Example:
        >>> config = LayerPackingConfiguration(
        ...     schema_version="1.0",
        ...     container=ContainerConfig(width=10, height=4),
        ...     pieces=[PieceConfig(id=1, width=2, height=2)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    container: ContainerConfig
    pieces: list[PieceConfig] = Field(..., min_length=1)
    search: SearchConfig = Field(default_factory=SearchConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        """Validate that the schema version is supported."""
        if v in SUPPORTED_VERSIONS:
            return v
        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("pieces")
    @classmethod
    def validate_unique_ids(cls, v: list[PieceConfig]) -> list[PieceConfig]:
        """Validate that no two pieces share an id."""
        seen: set[int] = set()
        duplicates: set[int] = set()
        for piece in v:
            if piece.id in seen:
                duplicates.add(piece.id)
            seen.add(piece.id)
        if duplicates:
            raise ValueError(f"Duplicate piece ids: {sorted(duplicates)}")
        return v
