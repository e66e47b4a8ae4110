"""Inline command for Lingobox CLI."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from lingobox.cli.app import AppContext
from lingobox.cli.decorators import handle_errors
from lingobox.core.logging import setup_logging
from lingobox.core.spinner import NoOpSpinner, Spinner
from lingobox.i18n import (
    MissingTranslationPolicy,
    create_i18n_inline_service,
    load_emitted_files,
)


logger = logging.getLogger(__name__)


@handle_errors
def inline_command(
    ctx: typer.Context,
    manifest: Annotated[
        Path, typer.Argument(help="JSON manifest listing the emitted build files")
    ],
    emitted_path: Annotated[
        Path,
        typer.Option(
            "--emitted-path", "-e", help="Directory holding the emitted build files"
        ),
    ],
    output_path: Annotated[
        Path,
        typer.Option("--output-path", "-o", help="Root directory for locale output"),
    ],
    locales: Annotated[
        list[str] | None,
        typer.Option(
            "--locale",
            "-l",
            help="Locale to inline (repeatable, default: all configured locales)",
        ),
    ] = None,
    exclude_entry: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude-entry", help="Entry point name never inlined (repeatable)"
        ),
    ] = None,
    missing_translation: Annotated[
        MissingTranslationPolicy | None,
        typer.Option(
            "--missing-translation",
            help="How messages without translation are reported",
            case_sensitive=False,
        ),
    ] = None,
    es5: Annotated[
        bool | None,
        typer.Option("--es5/--no-es5", help="Render legacy ES5 output"),
    ] = None,
    max_workers: Annotated[
        int | None,
        typer.Option("--max-workers", min=1, help="Number of inline worker threads"),
    ] = None,
    no_progress: Annotated[
        bool, typer.Option("--no-progress", help="Disable the progress spinner")
    ] = False,
) -> None:
    """Generate localized bundles from emitted build files.

    Every eligible script listed in MANIFEST is read from the emitted
    directory, removed from it, and written once per locale below the
    output root. All remaining files are copied into every locale directory.
    """
    app_ctx: AppContext = ctx.obj
    user_config = app_ctx.user_config
    config = user_config.config

    # Config log level applies only when no verbosity flag was given
    if (
        app_ctx.log_level_name is None
        and user_config.get_log_level_int() != logging.WARNING
    ):
        setup_logging(
            json_logs=app_ctx.json_logs,
            log_level_name=config.log_level,
            log_file=app_ctx.log_file,
        )

    i18n = user_config.build_i18n_options(locales)
    emitted_files = load_emitted_files(manifest)

    excluded = [*config.excluded_entry_points, *(exclude_entry or [])]
    policy = missing_translation or config.missing_translation

    logger.info(
        "Inlining %d emitted file(s) for locale(s): %s",
        len(emitted_files),
        ", ".join(i18n.inline_locales),
    )

    progress = NoOpSpinner() if no_progress else Spinner()
    service = create_i18n_inline_service(
        i18n,
        progress=progress,
        max_workers=max_workers or config.max_workers,
    )
    success = service.inline_emitted_files(
        emitted_files,
        emitted_path,
        output_path,
        excluded_entry_points=excluded,
        es5=config.es5 if es5 is None else es5,
        missing_translation=MissingTranslationPolicy(policy),
    )

    if not success:
        raise typer.Exit(1)


def register_commands(app: typer.Typer) -> None:
    """Register inline command with the main app.

    Args:
        app: The main Typer app
    """
    app.command(name="inline")(inline_command)
