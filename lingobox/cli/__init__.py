"""CLI interface for Lingobox."""

from lingobox.cli.app import app, main
from lingobox.cli.commands import register_all_commands


# Register all commands
register_all_commands(app)

__all__ = ["app", "main"]
