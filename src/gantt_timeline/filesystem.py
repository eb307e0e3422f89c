"""
FileSystem abstraction for gantt-timeline.

PURPOSE: Injectable file system interface for the record store.
AI CONTEXT: Lets tests exercise RecordStore without temp directories.

DESIGN:
- Protocol defines the four operations the store needs
- RealFileSystem delegates to os and open()
- MockFileSystem in tests/conftest.py keeps files in memory

USAGE:
    # Production
    store = RecordStore(filesystem=RealFileSystem())

    # Tests (MockFileSystem from conftest.py)
    store = RecordStore(storage_dir="/data", filesystem=mock_fs)
"""

from __future__ import annotations

import os
from typing import Protocol

__all__ = ["FileSystem", "RealFileSystem"]


class FileSystem(Protocol):
    """
    Protocol for the file operations used by the record store.

    All paths are strings. Implementations include RealFileSystem for
    production and MockFileSystem for tests.
    """

    def exists(self, path: str) -> bool:
        """Return True if path exists as a file or directory. Never raises."""
        ...

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create a directory and all missing parents, like `mkdir -p`.

        Raises:
            OSError: If the directory exists and exist_ok is False.
        """
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """
        Read a whole file as text.

        Business context: The store reads records.json and the CLI
        import command reads user-supplied record files through this.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """
        Write text to a file, replacing existing content.

        Raises:
            PermissionError: If the file is read-only.
        """
        ...


class RealFileSystem:
    """
    Production implementation backed by the os module.

    Each method delegates directly to the matching os or built-in call.
    """

    def exists(self, path: str) -> bool:  # pragma: no cover
        return os.path.exists(path)

    def makedirs(self, path: str, exist_ok: bool = False) -> None:  # pragma: no cover
        os.makedirs(path, exist_ok=exist_ok)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:  # pragma: no cover
        """
        Read file contents from disk.

        Example:
            >>> RealFileSystem().read_text('.gantt/records.json')
            '{"records": []}'
        """
        with open(path, encoding=encoding) as f:
            return f.read()

    def write_text(
        self, path: str, content: str, encoding: str = "utf-8"
    ) -> None:  # pragma: no cover
        """
        Write text content to disk, overwriting the file.

        Raises:
            PermissionError: If the file is read-only.
            OSError: If the parent directory does not exist.
        """
        with open(path, "w", encoding=encoding) as f:
            f.write(content)
