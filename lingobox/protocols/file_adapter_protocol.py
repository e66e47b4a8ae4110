"""Protocol for file system operations."""

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for file system operations."""

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file.

        Raises:
            FileSystemError: If file cannot be read
        """
        ...

    def write_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file, creating parent directories.

        Raises:
            FileSystemError: If file cannot be written
        """
        ...

    def read_json(self, path: Path, encoding: str = "utf-8") -> object:
        """Read and parse JSON content from a file.

        Raises:
            FileSystemError: If file cannot be read or JSON is invalid
        """
        ...

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory.

        Raises:
            FileSystemError: If directory cannot be created
        """
        ...

    def copy_file(self, src: Path, dst: Path) -> int:
        """Copy a file, creating the destination directory. Returns bytes copied.

        Raises:
            FileSystemError: If file cannot be copied
        """
        ...

    def remove_file(self, path: Path) -> None:
        """Remove a file. Missing files are not an error.

        Raises:
            FileSystemError: If file cannot be removed for any other reason
        """
        ...

    def iter_files(self, root: Path) -> Iterator[Path]:
        """Yield every file below ``root`` recursively, dotfiles included."""
        ...
