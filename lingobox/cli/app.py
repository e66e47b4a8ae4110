"""Main CLI application for Lingobox."""

import logging
import sys
from importlib.metadata import distribution
from typing import Annotated

import typer

from lingobox.cli.decorators.error_handling import print_stack_trace_if_verbose
from lingobox.config.user_config import UserConfig
from lingobox.core.logging import setup_logging


__all__ = ["app", "main", "__version__", "AppContext"]


__version__ = distribution("lingobox").version

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        verbose: int = 0,
        log_file: str | None = None,
        config_file: str | None = None,
        log_level_name: str | None = None,
        json_logs: bool = False,
    ):
        self.verbose = verbose
        self.json_logs = json_logs
        self.log_level_name = log_level_name
        self.log_file = log_file
        self.config_file = config_file
        self._user_config: UserConfig | None = None

    @property
    def user_config(self) -> UserConfig:
        """User configuration, loaded on first access."""
        if self._user_config is None:
            from lingobox.config.user_config import create_user_config

            self._user_config = create_user_config(cli_config_path=self.config_file)
        return self._user_config


app = typer.Typer(
    name="lingobox",
    help=f"""Lingobox localized bundle generator v{__version__}

Turns the scripts emitted by a build into one localized copy per locale:

Build output → Consume scripts → Inline translations → Copy assets
  (emitted/)  →   (read+delete)  →  (<output>/<locale>/)  → (<output>/<locale>/)

Common workflows:
  • Inline all configured locales:  lingobox inline manifest.json -e dist/.tmp -o dist
  • Inline one locale strictly:     lingobox inline manifest.json -e dist/.tmp -o dist -l fr --missing-translation error""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Render console logs as JSON lines"),
    ] = False,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Lingobox localized bundle generator."""
    if version:
        print(f"Lingobox v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    # Set log level based on verbosity, debug flag, or config
    if debug or verbose >= 2:
        log_level_name = "DEBUG"
    elif verbose == 1:
        log_level_name = "INFO"
    else:
        log_level_name = "WARNING"

    setup_logging(
        json_logs=json_logs, log_level_name=log_level_name, log_file=log_file
    )

    ctx.obj = AppContext(
        verbose=verbose,
        log_file=log_file,
        config_file=config_file,
        log_level_name=log_level_name if (debug or verbose) else None,
        json_logs=json_logs,
    )


def main() -> int:
    """Main CLI entry point."""
    try:
        app()
        exit_code = 0
    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        print_stack_trace_if_verbose()
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
