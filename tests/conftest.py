"""
Pytest configuration and shared fixtures for gantt-timeline tests.

This module contains:
- MockFileSystem: In-memory filesystem for testing without actual I/O
- Record fixtures shared by the engine, presenter, CLI and web tests
- Config override cleanup
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from gantt_timeline.config import Config
from gantt_timeline.models import DomainConfig, Record


class MockFileSystem:
    """
    In-memory file system for testing.

    Simulates a file system using:
    - _files: dict mapping path -> content (str)
    - _dirs: set of directory paths
    - _read_only: set of paths whose writes raise PermissionError

    FEATURES:
    - No actual I/O operations
    - Easy to inspect state
    - Write failure simulation via set_read_only()
    """

    def __init__(self) -> None:
        """
        Initialize an empty mock file system.

        Example:
            >>> fs = MockFileSystem()
            >>> fs.list_files()
            []
        """
        self._files: dict[str, str] = {}
        self._dirs: set[str] = set()
        self._read_only: set[str] = set()

    def exists(self, path: str) -> bool:
        """Return True if path is a mock file or directory."""
        return path in self._files or path in self._dirs

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create a mock directory and all its parents.

        Raises:
            OSError: If the directory exists and exist_ok is False, or
                the path is an existing file.
        """
        if path in self._dirs:
            if not exist_ok:
                raise OSError(f"Directory exists: {path}")
            return

        if path in self._files:
            raise OSError(f"Path is a file, not directory: {path}")

        parts = path.rstrip("/").split("/")
        for i in range(1, len(parts) + 1):
            parent = "/".join(parts[:i])
            if parent:
                self._dirs.add(parent)

    def read_text(self, path: str, _encoding: str = "utf-8") -> str:
        """
        Read mock file contents.

        Raises:
            FileNotFoundError: If path is not a mock file.
        """
        if path not in self._files:
            raise FileNotFoundError(f"No such file: {path}")
        return self._files[path]

    def write_text(self, path: str, content: str, _encoding: str = "utf-8") -> None:
        """
        Write text to a mock file, creating parent directories.

        Raises:
            PermissionError: If the path was marked read-only.
        """
        if path in self._read_only:
            raise PermissionError(f"Permission denied: {path}")

        parent = "/".join(path.rstrip("/").split("/")[:-1])
        if parent and parent not in self._dirs:
            self.makedirs(parent, exist_ok=True)

        self._files[path] = content

    # =========================================================================
    # TEST HELPERS
    # =========================================================================

    def get_file(self, path: str) -> str | None:
        """Return file content, or None if the file does not exist."""
        return self._files.get(path)

    def set_file(self, path: str, content: str) -> None:
        """Set file content directly (test setup)."""
        self.write_text(path, content)

    def set_read_only(self, path: str) -> None:
        """Make future writes to path raise PermissionError."""
        self._read_only.add(path)

    def list_files(self) -> list[str]:
        """Sorted list of all mock file paths."""
        return sorted(self._files)

    def list_dirs(self) -> list[str]:
        """Sorted list of all mock directory paths."""
        return sorted(self._dirs)


@pytest.fixture
def mock_fs() -> MockFileSystem:
    """
    Create a fresh MockFileSystem for each test.

    Returns:
        MockFileSystem: An empty in-memory filesystem.

    Example:
        >>> def test_store(mock_fs):
        ...     mock_fs.set_file('/data/records.json', '{"records": []}')
    """
    return MockFileSystem()


@pytest.fixture
def example_records() -> list[Record]:
    """
    Records of the reference scenario.

    A has a value at date 1 and an explicit zero at date 2; B has one
    value at date 1. With dates (1, 2) and labels (A, B) the data view
    holds one point per label and a global maximum of 10.

    Returns:
        list[Record]: [A@1=10, A@2=0, B@1=5]
    """
    return [Record("A", 1, 10), Record("A", 2, 0), Record("B", 1, 5)]


@pytest.fixture
def example_domain() -> DomainConfig:
    """Domain of the reference scenario: dates (1, 2), labels (A, B)."""
    return DomainConfig(dates=(1, 2), labels=("A", "B"))


@pytest.fixture
def yearly_records() -> list[Record]:
    """
    Multi-year records for range and gradient tests.

    Returns:
        list[Record]: Alpha active 2018-2021 (with a gap in 2019),
        Beta only in 2020, Gamma 2019-2020 with two records summed
        for 2019.
    """
    return [
        Record("Alpha", 2018, 4),
        Record("Alpha", 2020, 6),
        Record("Alpha", 2021, 10),
        Record("Beta", 2020, 2),
        Record("Gamma", 2019, 1),
        Record("Gamma", 2019, 2),
        Record("Gamma", 2020, 5),
    ]


@pytest.fixture(autouse=True)
def reset_config_overrides() -> Iterator[None]:
    """Clear Config test overrides after every test."""
    yield
    Config.reset_test_overrides()
