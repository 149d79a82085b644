"""Typer CLI for rectangle layer packing."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from rectlayers.application import (
    CheckCombinationCommand,
    PipelineCommand,
    PipelineResult,
)
from rectlayers.application.config import (
    ConfigError,
    config_to_inventory,
    config_to_pipeline_settings,
    config_to_search_settings,
    load_config,
    merge_config_with_cli,
)
from rectlayers.application.services import FeasibilityCheckError
from rectlayers.cli.commands import display_load_error, templates_app, validate_command
from rectlayers.domain import Layout, UnknownPieceError, combination_to_string
from rectlayers.infrastructure import CombinationFormatError, LayoutRenderer

# Exit code of `check` when the combination does not fit
EXIT_INFEASIBLE = 2

app = typer.Typer(
    name="rectlayers",
    help="Find piece subsets that fit a container and three-layer coverings of an inventory.",
)

app.command(name="validate")(validate_command)
app.add_typer(templates_app, name="templates")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_ids(text: str) -> list[int]:
    tokens = [token.strip() for token in text.split(",") if token.strip()]
    if not tokens:
        raise ValueError("No piece ids given")
    try:
        return [int(token) for token in tokens]
    except ValueError:
        raise ValueError(f"Invalid piece ids: {text!r}") from None


def _print_summary(result: PipelineResult) -> None:
    typer.echo("Pipeline summary:")
    rows = [
        ("candidates", len(result.candidates)),
        ("deduplicated", len(result.deduplicated)),
        ("layers", len(result.layers)),
        ("expanded layers", len(result.expanded_layers)),
        ("solutions", len(result.solutions)),
        ("ranked", len(result.ranking)),
    ]
    for name, count in rows:
        typer.echo(f"  {name:<16} {count}")
    typer.echo(f"  {'elapsed':<16} {result.total_seconds:.2f}s")
    if result.solutions:
        typer.echo()
        typer.echo("First solution:")
        typer.echo("  " + " ".join(combination_to_string(c) for c in result.solutions[0]))


def _print_layout(layout: Layout) -> None:
    typer.echo(f"{'id':>6} {'x':>6} {'y':>6} {'width':>6} {'height':>6}")
    for placed in layout.placements:
        piece = placed.piece
        typer.echo(
            f"{piece.id:>6} {placed.x:>6} {placed.y:>6} {piece.width:>6} {piece.height:>6}"
        )
    typer.echo(f"Waste: {layout.waste_percentage:.1f}%")


@app.command()
def run(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, help="Number of feasibility worker threads"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output"),
    ] = False,
) -> None:
    """Run the pipeline: generate, deduplicate, check, match and rank.

    Example:
        rectlayers run mm10.json --workers 8
    """
    _configure_logging(verbose)
    try:
        config = merge_config_with_cli(load_config(config_file), workers=workers)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    inventory = config_to_inventory(config)
    search = config_to_search_settings(config)
    settings = config_to_pipeline_settings(config, base_dir=config_file.parent)

    try:
        result = PipelineCommand().execute(inventory, search, settings)
    except CombinationFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except FeasibilityCheckError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not result.is_valid:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error}", err=True)
        raise typer.Exit(code=1)

    _print_summary(result)


@app.command()
def check(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    ids: Annotated[
        str,
        typer.Argument(help="Comma-separated piece ids, e.g. 1,4,7"),
    ],
    svg: Annotated[
        Path | None,
        typer.Option("--svg", help="Write the layout as SVG to this path"),
    ] = None,
    ascii_output: Annotated[
        bool,
        typer.Option("--ascii", help="Print the layout as an ASCII grid"),
    ] = False,
    distance: Annotated[
        int | None,
        typer.Option("--distance", "-d", min=0, help="Override the configured clearance"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output"),
    ] = False,
) -> None:
    """Check whether one combination fits the container.

    Exit codes:
        0 - The combination fits
        1 - Input errors
        2 - The combination does not fit

    Example:
        rectlayers check example-9.json 1,2,3,4,5,6,7,8,9 --ascii
    """
    _configure_logging(verbose)
    try:
        config = merge_config_with_cli(load_config(config_file), distance=distance)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    inventory = config_to_inventory(config)
    try:
        layout = CheckCombinationCommand().execute(
            inventory, _parse_ids(ids), distance=config.search.distance
        )
    except UnknownPieceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if layout is None:
        typer.echo(f"Combination {ids} does not fit.")
        raise typer.Exit(code=EXIT_INFEASIBLE)

    typer.echo(f"Combination {combination_to_string(layout.ids)} fits.")
    _print_layout(layout)

    renderer = LayoutRenderer()
    if ascii_output:
        typer.echo()
        typer.echo(renderer.render_ascii(layout))
    if svg is not None:
        try:
            svg.write_text(renderer.render_svg(layout), encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: Could not write file: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"SVG written to: {svg}")


if __name__ == "__main__":
    app()
