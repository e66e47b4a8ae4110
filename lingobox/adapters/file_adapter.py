"""File adapter for abstracting file system operations."""

import json
import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from lingobox.core.errors import FileSystemError
from lingobox.protocols import FileAdapterProtocol
from lingobox.utils.error_utils import create_file_error


logger = logging.getLogger(__name__)


@contextmanager
def _file_errors(path: Path, operation: str, **details: Any) -> Iterator[None]:
    """Re-raise OS and decoding errors as FileSystemError for ``path``."""
    try:
        yield
    except FileSystemError:
        raise
    except FileNotFoundError as e:
        logger.debug("%s: file not found: %s", operation, path)
        raise create_file_error(path, operation, e, details) from e
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("%s failed on %s: %s", operation, path, e)
        raise create_file_error(path, operation, e, details) from e


class FileSystemAdapter:
    """Local file system implementation of FileAdapterProtocol."""

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        with _file_errors(path, "read_text", encoding=encoding):
            with path.open(mode="r", encoding=encoding) as f:
                content = f.read()
        logger.debug("Read %d characters from %s", len(content), path)
        return content

    def write_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        self.mkdir(path.parent)
        with _file_errors(
            path, "write_text", encoding=encoding, content_length=len(content)
        ):
            with path.open(mode="w", encoding=encoding) as f:
                f.write(content)
        logger.debug("Wrote %d characters to %s", len(content), path)

    def read_json(self, path: Path, encoding: str = "utf-8") -> object:
        content = self.read_text(path, encoding)
        with _file_errors(path, "read_json", encoding=encoding):
            return json.loads(content)

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        with _file_errors(path, "mkdir", parents=parents, exist_ok=exist_ok):
            path.mkdir(parents=parents, exist_ok=exist_ok)

    def copy_file(self, src: Path, dst: Path) -> int:
        self.mkdir(dst.parent)
        with _file_errors(src, "copy_file", source=str(src), destination=str(dst)):
            shutil.copy2(src, dst)
            size = dst.stat().st_size
        logger.debug("Copied %s -> %s (%d bytes)", src, dst, size)
        return size

    def remove_file(self, path: Path) -> None:
        with _file_errors(path, "remove_file"):
            path.unlink(missing_ok=True)
        logger.debug("Removed file: %s", path)

    def iter_files(self, root: Path) -> Iterator[Path]:
        """Yield every regular file below ``root``, sorted per directory."""
        if not root.is_dir():
            return
        with os.scandir(root) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                entry_path = Path(entry.path)
                if entry.is_dir(follow_symlinks=False):
                    yield from self.iter_files(entry_path)
                elif entry.is_file():
                    yield entry_path


def create_file_adapter() -> FileAdapterProtocol:
    """Create a file adapter with default implementation."""
    return FileSystemAdapter()
