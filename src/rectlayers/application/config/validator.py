"""Validation structures and packing advisory checks.

Schema validation only guarantees a well-formed configuration. The checks
here flag configurations that are well-formed but cannot produce a
three-layer covering.
"""

from dataclasses import dataclass, field
from typing import Any

from rectlayers.application.config.schema import LayerPackingConfiguration
from rectlayers.domain import CONTAINER_ID, Piece

# Number of container layers a covering is made of
LAYER_COUNT = 3


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "search.min_pieces")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 1 with errors, 2 with only warnings, 0 otherwise."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self


def check_packing_advisories(config: LayerPackingConfiguration) -> ValidationResult:
    """Check a configuration for settings that rule out any covering.

    Args:
        config: Schema-valid configuration.

    Returns:
        ValidationResult with errors and warnings.
    """
    result = ValidationResult()
    container = Piece(
        id=CONTAINER_ID, width=config.container.width, height=config.container.height
    )
    search = config.search

    if search.min_pieces > len(config.pieces):
        result.add_error(
            "search.min_pieces",
            f"Minimum pieces exceeds the inventory size ({len(config.pieces)})",
            search.min_pieces,
        )

    for index, piece_config in enumerate(config.pieces):
        piece = Piece(id=piece_config.id, width=piece_config.width, height=piece_config.height)
        if not piece.orientations(container):
            result.add_warning(
                f"pieces[{index}]",
                f"Piece {piece.id} ({piece.width}x{piece.height}) fits the container "
                "in no orientation",
                suggestion="Remove the piece or enlarge the container",
            )

    total_area = sum(p.width * p.height for p in config.pieces)
    if total_area > LAYER_COUNT * container.area:
        result.add_warning(
            "pieces",
            f"Total piece area {total_area} exceeds {LAYER_COUNT} container areas "
            f"({LAYER_COUNT * container.area})",
        )

    if search.min_solution_area is not None and search.min_solution_area > container.area:
        result.add_warning(
            "search.min_solution_area",
            f"Minimum solution area exceeds the container area ({container.area})",
            suggestion="Omit min_solution_area to derive it from the inventory",
        )

    return result


def validate_config(config: LayerPackingConfiguration) -> ValidationResult:
    """Perform the full post-schema validation of a configuration."""
    return check_packing_advisories(config)
