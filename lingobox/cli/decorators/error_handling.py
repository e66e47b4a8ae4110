"""Error handling decorators for CLI commands."""

import json
import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from lingobox.core.errors import (
    ConfigError,
    ConsumptionError,
    FileSystemError,
    InlineExecutionError,
    LingoboxError,
    ManifestError,
)
from lingobox.core.logging import get_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_logger(__name__)

VERBOSE_FLAGS = ("-v", "-vv", "--verbose", "--debug")

# First match wins, subclasses before their bases
ERROR_EVENTS: tuple[tuple[type[Exception], str], ...] = (
    (ConfigError, "configuration_error"),
    (ManifestError, "manifest_error"),
    (ConsumptionError, "consumption_error"),
    (InlineExecutionError, "inline_execution_error"),
    (FileSystemError, "file_system_error"),
    (json.JSONDecodeError, "invalid_json"),
)


def error_event(error: Exception) -> str:
    """Structured log event name for an error raised by a command."""
    for error_type, event in ERROR_EVENTS:
        if isinstance(error, error_type):
            return event
    return "unexpected_error"


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator turning command failures into a logged non-zero exit.

    Lingobox errors are logged with their context. Anything else is logged as
    unexpected, with the traceback when debug logging is enabled.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except (LingoboxError, json.JSONDecodeError) as e:
            context = e.context if isinstance(e, LingoboxError) else {}
            logger.error(error_event(e), error=str(e), context=context)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logging.getLogger(__name__).isEnabledFor(logging.DEBUG)
            logger.error(error_event(e), error=str(e), exc_info=exc_info)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in VERBOSE_FLAGS):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
