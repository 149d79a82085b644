"""Integration tests for the templates CLI commands.

These tests verify:
- templates list shows every bundled template with its size
- templates show prints inventory statistics
- templates init writes a loadable configuration
- Existing files are only replaced with --force
- Unknown templates are reported
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rectlayers.application.config import load_config
from rectlayers.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestTemplatesList:
    """Tests for templates list."""

    def test_lists_templates(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["templates", "list"])

        assert result.exit_code == 0
        assert "Available templates:" in result.output
        for name in ("mm", "mm10", "mm100", "example-9", "example-20"):
            assert name in result.output

    def test_lists_container_and_piece_count(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["templates", "list"])

        rows = [line.split() for line in result.output.splitlines() if line.strip()]
        lines = {row[0]: row for row in rows}
        assert lines["example-9"][1:4] == ["10x4", "9", "1.00"]
        assert lines["example-20"][1:4] == ["8x4", "20", "3.00"]
        assert lines["mm"][1:3] == ["71x47", "18"]


class TestTemplatesShow:
    """Tests for templates show."""

    def test_shows_statistics(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["templates", "show", "example-20"])

        assert result.exit_code == 0
        assert "Template: example-20" in result.output
        assert "Container: 8 x 4 (area 32)" in result.output
        assert "Pieces: 20" in result.output
        assert "Total piece area: 96" in result.output

    def test_unknown_template(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["templates", "show", "bookcase"])

        assert result.exit_code == 1
        assert "Template not found: bookcase" in result.output


class TestTemplatesInit:
    """Tests for templates init."""

    def test_init_with_output(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "run.json"
        result = runner.invoke(app, ["templates", "init", "example-9", "-o", str(output)])

        assert result.exit_code == 0
        assert f"Created: {output}" in result.output
        assert "9 pieces, container 10x4" in result.output
        assert len(load_config(output).pieces) == 9

    def test_existing_file_requires_force(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "run.json"
        output.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["templates", "init", "mm", "-o", str(output)])
        assert result.exit_code == 1
        assert "File already exists" in result.output

        result = runner.invoke(app, ["templates", "init", "mm", "-o", str(output), "--force"])
        assert result.exit_code == 0
        assert len(load_config(output).pieces) == 18

    def test_unknown_template(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["templates", "init", "bookcase", "-o", str(tmp_path / "x.json")]
        )

        assert result.exit_code == 1
        assert "Template not found: bookcase" in result.output
        assert "example-20" in result.output

    def test_initialized_template_validates(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "example.json"
        runner.invoke(app, ["templates", "init", "example-20", "-o", str(output)])

        result = runner.invoke(app, ["validate", str(output)])
        assert result.exit_code == 0
