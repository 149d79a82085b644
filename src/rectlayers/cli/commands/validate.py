"""Validate command for checking run configuration files.

This module provides the `validate` command that checks a JSON configuration
file for errors, prints inventory statistics, and reports packing advisories.
"""

from pathlib import Path
from typing import Annotated

import typer

from rectlayers.application.config import (
    ConfigError,
    ValidationResult,
    config_to_inventory,
    load_config,
    validate_config,
)
from rectlayers.domain import Inventory, combination_to_string


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path") or "(root)"
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def display_statistics(inventory: Inventory) -> None:
    """Display container, area and equivalence class statistics."""
    container = inventory.container
    typer.echo(f"Container: {container.width} x {container.height} (area {container.area})")
    typer.echo(f"Pieces: {len(inventory)}")
    typer.echo(f"Total piece area: {inventory.total_area}")
    typer.echo(f"Three container areas: {3 * container.area}")
    classes = inventory.equivalence_classes()
    typer.echo(f"Equivalence classes: {len(classes)}")
    for (major, minor), members in sorted(classes.items()):
        typer.echo(f"  {major},{minor}: {combination_to_string(members)}")
    typer.echo()


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a run configuration file.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        rectlayers validate run.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    display_statistics(config_to_inventory(config))
    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
