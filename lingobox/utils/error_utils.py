"""Helpers for building standardized Lingobox errors."""

from pathlib import Path
from typing import Any

from lingobox.core.errors import FileSystemError


def create_file_error(
    path: Path | str,
    operation: str,
    error: Exception,
    details: dict[str, Any] | None = None,
) -> FileSystemError:
    """Create a FileSystemError with a consistent message.

    Args:
        path: Path the operation was performed on
        operation: Name of the failed operation (e.g. "read_text")
        error: Underlying exception
        details: Extra context kept on the error

    Returns:
        FileSystemError describing the failure
    """
    context = {"error_type": type(error).__name__}
    if details:
        context.update(details)
    return FileSystemError(path, operation, error, context)
