"""Result models for file operations."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CopyResult:
    """Result of a pass-through copy with simple throughput metrics."""

    files_copied: int = 0
    bytes_copied: int = 0
    elapsed_time: float = 0.0
    copied_paths: list[Path] = field(default_factory=list)
    skipped_paths: list[Path] = field(default_factory=list)

    @property
    def speed_mbps(self) -> float:
        """Calculate copy speed in MB/s."""
        if self.elapsed_time > 0:
            return (self.bytes_copied / (1024 * 1024)) / self.elapsed_time
        return 0.0
