"""Templates commands for listing, inspecting and initializing run configurations.

This module provides the `templates` command group with subcommands for
listing bundled inventories, showing one template's statistics, and
writing one out as a configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer

from rectlayers.application.config import ConfigError
from rectlayers.application.templates import TemplateManager, TemplateNotFoundError
from rectlayers.cli.commands.validate import display_load_error, display_statistics

templates_app = typer.Typer(
    name="templates",
    help="Manage bundled inventory templates.",
)


def _unknown_template(manager: TemplateManager, name: str) -> typer.Exit:
    available = ", ".join(info.name for info in manager.list_templates())
    typer.echo(f"Error: Template not found: {name}", err=True)
    typer.echo(f"Available templates: {available}", err=True)
    return typer.Exit(code=1)


@templates_app.command(name="list")
def list_templates() -> None:
    """List all available templates with their container and piece count.

    Example:
        rectlayers templates list
    """
    manager = TemplateManager()
    try:
        templates = manager.list_templates()
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    rows = [
        (
            info.name,
            f"{info.container_width}x{info.container_height}",
            str(info.piece_count),
            f"{info.layers_needed:.2f}",
            info.description,
        )
        for info in templates
    ]
    header = ("Name", "Container", "Pieces", "Layers", "Description")
    widths = [max(len(row[i]) for row in [header, *rows]) for i in range(4)]

    typer.echo("Available templates:")
    typer.echo()
    for row in [header, *rows]:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        typer.echo("  " + "  ".join([*cells, row[4]]))
    typer.echo()
    typer.echo("Use 'rectlayers templates show <name>' for inventory statistics.")
    typer.echo("Use 'rectlayers templates init <name>' to create a configuration file.")


@templates_app.command(name="show")
def show_template(
    name: Annotated[
        str,
        typer.Argument(help="Name of the template to show"),
    ],
) -> None:
    """Show the inventory statistics of a template.

    Example:
        rectlayers templates show example-20
    """
    manager = TemplateManager()
    if not manager.template_exists(name):
        raise _unknown_template(manager, name)

    try:
        inventory = manager.template_inventory(name)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    typer.echo(f"Template: {name}")
    typer.echo()
    display_statistics(inventory)


@templates_app.command(name="init")
def init_template(
    name: Annotated[
        str,
        typer.Argument(help="Name of the template to initialize"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: <name>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file"),
    ] = False,
) -> None:
    """Initialize a new configuration file from a template.

    Examples:
        rectlayers templates init mm10
        rectlayers templates init example-9 --output small.json
    """
    manager = TemplateManager()
    if output is None:
        output = Path(f"{name}.json")

    if not manager.template_exists(name):
        raise _unknown_template(manager, name)

    try:
        config = manager.init_template(name, output, overwrite=force)
    except FileExistsError:
        typer.echo(f"Error: File already exists: {output}", err=True)
        typer.echo("Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)
    except TemplateNotFoundError:
        raise _unknown_template(manager, name)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error: Could not write file: {e}", err=True)
        raise typer.Exit(code=1)
    container = config.container
    typer.echo(f"Created: {output}")
    typer.echo(f"  {len(config.pieces)} pieces, container {container.width}x{container.height}")
