"""Tests for FileSystemAdapter implementation."""

from pathlib import Path
from unittest.mock import mock_open, patch

import pytest

from lingobox.adapters.file_adapter import FileSystemAdapter, create_file_adapter
from lingobox.core.errors import FileSystemError, LingoboxError
from lingobox.protocols.file_adapter_protocol import FileAdapterProtocol


class TestFileSystemAdapter:
    """Test FileSystemAdapter class."""

    def test_read_text_success(self):
        """Test successful text file reading."""
        adapter = FileSystemAdapter()

        with patch("pathlib.Path.open", mock_open(read_data="Hello, world!")):
            result = adapter.read_text(Path("/test/file.txt"))

        assert result == "Hello, world!"

    def test_read_text_file_not_found(self):
        """Test read_text raises FileSystemError when file doesn't exist."""
        adapter = FileSystemAdapter()

        with (
            patch("pathlib.Path.open", side_effect=FileNotFoundError("File not found")),
            pytest.raises(
                FileSystemError,
                match="File operation 'read_text' failed on '/nonexistent/file.txt': File not found",
            ) as exc_info,
        ):
            adapter.read_text(Path("/nonexistent/file.txt"))

        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert exc_info.value.operation == "read_text"
        assert isinstance(exc_info.value, LingoboxError)

    def test_read_text_permission_error(self):
        """Test read_text raises FileSystemError when access denied."""
        adapter = FileSystemAdapter()

        with (
            patch(
                "pathlib.Path.open", side_effect=PermissionError("Permission denied")
            ),
            pytest.raises(FileSystemError, match="Permission denied"),
        ):
            adapter.read_text(Path("/restricted/file.txt"))

    def test_write_text_creates_parents(self, tmp_path):
        adapter = FileSystemAdapter()
        path = tmp_path / "a" / "b" / "file.txt"

        adapter.write_text(path, "content")

        assert path.read_text(encoding="utf-8") == "content"

    def test_read_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"files": [{"file": "main.js"}]}')

        assert FileSystemAdapter().read_json(path) == {"files": [{"file": "main.js"}]}

    def test_read_json_invalid(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json")

        with pytest.raises(FileSystemError, match="read_json"):
            FileSystemAdapter().read_json(path)

    def test_copy_file_returns_size(self, tmp_path):
        src = tmp_path / "src.txt"
        src.write_bytes(b"12345")

        size = FileSystemAdapter().copy_file(src, tmp_path / "out" / "dst.txt")

        assert size == 5
        assert (tmp_path / "out" / "dst.txt").read_bytes() == b"12345"

    def test_copy_missing_source(self, tmp_path):
        with pytest.raises(FileSystemError, match="copy_file"):
            FileSystemAdapter().copy_file(tmp_path / "missing", tmp_path / "dst")

    def test_remove_file_missing_is_ok(self, tmp_path):
        FileSystemAdapter().remove_file(tmp_path / "missing.txt")

    def test_remove_directory_raises(self, tmp_path):
        directory = tmp_path / "dir"
        directory.mkdir()

        with pytest.raises(FileSystemError, match="remove_file"):
            FileSystemAdapter().remove_file(directory)

    def test_iter_files_is_recursive_and_sorted(self, tmp_path):
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "z.txt").write_text("z")
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / ".hidden").write_text("h")

        files = list(FileSystemAdapter().iter_files(tmp_path))

        assert files == [
            tmp_path / ".hidden",
            tmp_path / "a.txt",
            tmp_path / "b" / "z.txt",
        ]

    def test_iter_files_missing_root(self, tmp_path):
        assert list(FileSystemAdapter().iter_files(tmp_path / "missing")) == []


def test_create_file_adapter():
    """Test factory function returns a protocol implementation."""
    adapter = create_file_adapter()
    assert isinstance(adapter, FileSystemAdapter)
    assert isinstance(adapter, FileAdapterProtocol)
