"""Unit tests for packing advisory validation."""

from typing import Any

from rectlayers.application.config import (
    ValidationResult,
    check_packing_advisories,
    load_config_from_dict,
    validate_config,
)


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_empty_result(self) -> None:
        result = ValidationResult()
        assert result.is_valid
        assert not result.has_warnings
        assert result.exit_code == 0

    def test_warnings_only(self) -> None:
        result = ValidationResult().add_warning("pieces", "Too much area")
        assert result.is_valid
        assert result.has_warnings
        assert result.exit_code == 2

    def test_errors_take_precedence(self) -> None:
        result = ValidationResult()
        result.add_warning("pieces", "Too much area").add_error("search.min_pieces", "Too many", 9)
        assert not result.is_valid
        assert result.exit_code == 1
        assert result.errors[0].value == 9


class TestCheckPackingAdvisories:
    """Tests for check_packing_advisories."""

    def test_clean_configuration(self, small_config_data: dict[str, Any]) -> None:
        result = check_packing_advisories(load_config_from_dict(small_config_data))
        assert result.errors == []
        assert result.warnings == []

    def test_min_pieces_above_inventory_size(self, config_factory) -> None:
        data = config_factory(
            (4, 2), [(1, 2, 2), (2, 2, 2)], search={"min_pieces": 3, "max_pieces": 3}
        )
        result = check_packing_advisories(load_config_from_dict(data))
        assert not result.is_valid
        assert result.errors[0].path == "search.min_pieces"
        assert result.errors[0].value == 3

    def test_piece_without_orientation(self, config_factory) -> None:
        data = config_factory((4, 2), [(1, 2, 2), (2, 5, 5)])
        result = check_packing_advisories(load_config_from_dict(data))
        assert result.is_valid
        assert [w.path for w in result.warnings] == ["pieces[1]"]
        assert "Piece 2 (5x5)" in result.warnings[0].message

    def test_rotated_piece_is_not_flagged(self, config_factory) -> None:
        data = config_factory((4, 2), [(1, 1, 4)])
        result = check_packing_advisories(load_config_from_dict(data))
        assert result.warnings == []

    def test_total_area_above_three_containers(self, config_factory) -> None:
        data = config_factory((2, 2), [(i, 2, 2) for i in range(1, 5)])
        result = check_packing_advisories(load_config_from_dict(data))
        assert [w.path for w in result.warnings] == ["pieces"]
        assert "exceeds 3 container areas (12)" in result.warnings[0].message

    def test_min_solution_area_above_container(self, config_factory) -> None:
        data = config_factory((4, 2), [(1, 2, 2)], search={"min_solution_area": 9})
        result = check_packing_advisories(load_config_from_dict(data))
        assert [w.path for w in result.warnings] == ["search.min_solution_area"]
        assert result.warnings[0].suggestion is not None

    def test_validate_config_runs_advisories(self, config_factory) -> None:
        data = config_factory((4, 2), [(1, 5, 5)])
        assert validate_config(load_config_from_dict(data)).exit_code == 2
