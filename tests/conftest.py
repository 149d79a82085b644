"""Pytest configuration and shared fixtures for layer packing tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from rectlayers.domain import Inventory


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: tests exercising several layers together")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Inventories
# =============================================================================

# (id, width, height)
NINE_PIECES = [
    (1, 2, 2),
    (2, 2, 1),
    (3, 3, 2),
    (4, 3, 1),
    (5, 4, 2),
    (6, 2, 2),
    (7, 2, 3),
    (8, 5, 1),
    (9, 2, 1),
]

TWENTY_PIECES = [
    (1, 2, 1),
    (2, 2, 1),
    (3, 4, 3),
    (4, 2, 2),
    (5, 3, 2),
    (6, 3, 2),
    (7, 3, 2),
    (8, 3, 2),
    (9, 1, 1),
    (10, 4, 1),
    (11, 4, 1),
    (12, 3, 3),
    (13, 3, 2),
    (14, 2, 2),
    (15, 3, 2),
    (16, 4, 2),
    (17, 2, 2),
    (18, 2, 1),
    (19, 2, 1),
    (20, 2, 1),
]

# Eight pieces filling exactly three 4x2 containers
SMALL_PIECES = [
    (1, 4, 1),
    (2, 4, 1),
    (3, 2, 2),
    (4, 2, 2),
    (5, 2, 1),
    (6, 2, 1),
    (7, 2, 1),
    (8, 2, 1),
]


@pytest.fixture
def nine_piece_inventory() -> Inventory:
    """Nine pieces tiling a 10x4 container exactly."""
    return Inventory.from_dimensions(container=(10, 4), pieces=NINE_PIECES)


@pytest.fixture
def twenty_piece_inventory() -> Inventory:
    """Twenty pieces covered by three 8x4 layers."""
    return Inventory.from_dimensions(container=(8, 4), pieces=TWENTY_PIECES)


@pytest.fixture
def small_inventory() -> Inventory:
    """Eight pieces covered by three 4x2 layers."""
    return Inventory.from_dimensions(container=(4, 2), pieces=SMALL_PIECES)


# =============================================================================
# Configuration files
# =============================================================================


def make_config(
    container: tuple[int, int],
    pieces: list[tuple[int, int, int]],
    **sections: Any,
) -> dict[str, Any]:
    """Build a configuration dictionary from plain tuples."""
    data: dict[str, Any] = {
        "schema_version": "1.0",
        "container": {"width": container[0], "height": container[1]},
        "pieces": [{"id": i, "width": w, "height": h} for i, w, h in pieces],
    }
    data.update(sections)
    return data


@pytest.fixture
def small_config_data() -> dict[str, Any]:
    return make_config((4, 2), SMALL_PIECES, search={"workers": 2})


@pytest.fixture
def small_config_file(tmp_path: Path, small_config_data: dict[str, Any]) -> Path:
    """Small inventory configuration written to a temporary file."""
    path = tmp_path / "small.json"
    path.write_text(json.dumps(small_config_data), encoding="utf-8")
    return path


@pytest.fixture
def config_factory():
    """Return the make_config helper for tests building their own configs."""
    return make_config


@pytest.fixture
def write_config(tmp_path: Path):
    """Return a helper writing a configuration dictionary to a JSON file."""

    def _write(data: dict[str, Any], name: str = "config.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
