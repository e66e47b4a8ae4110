"""CLI command modules."""

import typer

from lingobox.cli.commands.inline import register_commands as register_inline_commands


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Args:
        app: The main Typer app
    """
    register_inline_commands(app)
