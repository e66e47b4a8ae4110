"""Exception hierarchy for Lingobox."""

from pathlib import Path
from typing import Any


class LingoboxError(Exception):
    """Base exception for all Lingobox errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class FileSystemError(LingoboxError):
    """Raised when a file system operation fails."""

    def __init__(
        self,
        path: Path | str,
        operation: str,
        cause: Exception | str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.path = Path(path)
        self.operation = operation
        self.cause = cause
        message = f"File operation '{operation}' failed on '{path}': {cause}"
        super().__init__(message, context)


class ConfigError(LingoboxError):
    """Raised when configuration cannot be loaded or is invalid."""


class ManifestError(LingoboxError):
    """Raised when an emitted-files manifest cannot be parsed."""


class ConsumptionError(LingoboxError):
    """Raised when an emitted artifact cannot be read for inlining."""


class InlineExecutionError(LingoboxError):
    """Raised when the inline worker pool fails to process a request."""
