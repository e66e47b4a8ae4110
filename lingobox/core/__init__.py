from .errors import (
    ConfigError,
    ConsumptionError,
    FileSystemError,
    InlineExecutionError,
    LingoboxError,
    ManifestError,
)
from .logging import get_logger, setup_logging


__all__ = [
    "setup_logging",
    "get_logger",
    "LingoboxError",
    "FileSystemError",
    "ConfigError",
    "ManifestError",
    "ConsumptionError",
    "InlineExecutionError",
]
