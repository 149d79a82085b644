"""CLI command implementations for the rectlayers application.

This package contains subcommands for the rectlayers CLI, including:
- validate: Validate a configuration file
- templates: Manage bundled inventory templates
"""

from rectlayers.cli.commands.templates import templates_app
from rectlayers.cli.commands.validate import (
    display_load_error,
    display_statistics,
    validate_command,
)

__all__ = ["display_load_error", "display_statistics", "templates_app", "validate_command"]
