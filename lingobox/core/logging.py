"""Logging configuration and setup for Lingobox."""

import logging
import shutil
import sys
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, TextIO

import structlog
from rich.console import Console
from rich.traceback import Traceback
from structlog.stdlib import BoundLogger
from structlog.typing import ExcInfo, Processor


def format_timestamp_ms(
    logger: Any, log_method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Format timestamp with milliseconds instead of microseconds."""
    if "timestamp_raw" in event_dict:
        # Truncate microseconds to milliseconds (6 digits to 3)
        timestamp_raw = event_dict.pop("timestamp_raw")
        event_dict["timestamp"] = timestamp_raw[:-3]
    return event_dict


def _timestamper(log_level: int) -> Processor:
    return structlog.processors.TimeStamper(
        fmt="%H:%M:%S.%f" if log_level < logging.INFO else "%Y-%m-%d %H:%M:%S.%f",
        key="timestamp_raw",
    )


def _callsite_adder() -> Processor:
    return structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.LINENO,
        ]
    )


def configure_structlog(log_level: int = logging.INFO) -> None:
    """Configure structlog with shared processors following canonical pattern."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    # Dev mode (DEBUG): add callsite information
    if log_level < logging.INFO:
        processors.append(_callsite_adder())

    processors.extend(
        [
            _timestamper(log_level),
            format_timestamp_ms,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            # This MUST be the last processor - allows different renderers per handler
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    )

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def rich_traceback(sio: TextIO, exc_info: ExcInfo) -> None:
    """Pretty-print *exc_info* to *sio* using the *Rich* package."""
    term_width, _height = shutil.get_terminal_size((80, 123))
    sio.write("\n")
    Console(file=sio, color_system="truecolor").print(
        Traceback.from_exception(
            *exc_info,
            extra_lines=1,
            width=term_width,
            max_frames=5,
            suppress=["click", "typer"],
        ),
    )


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "WARNING",
    log_file: str | Path | None = None,
) -> BoundLogger:
    """
    Setup logging for the entire application using canonical structlog pattern.
    Returns a structlog logger instance.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    # Get root logger and set level BEFORE configuring structlog
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    configure_structlog(log_level=log_level)

    root_logger.handlers = []

    # Shared processors for foreign (stdlib) logs
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.dev.set_exc_info,
    ]
    if log_level < logging.INFO:
        shared_processors.append(_callsite_adder())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(exception_formatter=rich_traceback)
    )
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors
            + [_timestamper(log_level), format_timestamp_ms],
            processor=console_renderer,
        )
    )
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8", delay=True)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared_processors
                + [structlog.processors.TimeStamper(fmt="iso")],
                processor=structlog.processors.JSONRenderer(),
            )
        )
        root_logger.addHandler(file_handler)

    return structlog.get_logger()  # type: ignore[no-any-return]


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
