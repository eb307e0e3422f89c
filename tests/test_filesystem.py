"""Tests for filesystem module."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import MockFileSystem

from gantt_timeline.filesystem import RealFileSystem
from gantt_timeline.storage import RecordStore


class TestMockFileSystem:
    """Tests for the in-memory filesystem used by the store tests."""

    def test_initial_state_empty(self) -> None:
        """Verifies a new MockFileSystem has no files or directories.

        Business context:
        Test isolation requires a clean slate for every test.

        Arrangement:
        Create new MockFileSystem instance.

        Action:
        Query list_files() and list_dirs().

        Assertion Strategy:
        Validates both return empty lists.
        """
        fs = MockFileSystem()
        assert fs.list_files() == []
        assert fs.list_dirs() == []

    def test_write_creates_parents(self) -> None:
        """Writing a file registers every parent directory."""
        fs = MockFileSystem()
        fs.write_text("/a/b/c.json", "{}")

        assert fs.exists("/a/b")
        assert fs.exists("/a")
        assert fs.get_file("/a/b/c.json") == "{}"

    def test_read_missing_raises(self) -> None:
        """Reading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            MockFileSystem().read_text("/nope")

    def test_makedirs_exist_ok(self) -> None:
        """makedirs() honors exist_ok and refuses file paths."""
        fs = MockFileSystem()
        fs.makedirs("/data")
        fs.makedirs("/data", exist_ok=True)
        fs.set_file("/data/file", "x")

        with pytest.raises(OSError):
            fs.makedirs("/data")
        with pytest.raises(OSError):
            fs.makedirs("/data/file")

    def test_read_only(self) -> None:
        """Writes to read-only paths raise PermissionError."""
        fs = MockFileSystem()
        fs.set_read_only("/locked.json")

        with pytest.raises(PermissionError):
            fs.write_text("/locked.json", "{}")


class TestRealFileSystem:
    """Tests for the disk-backed filesystem."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Verifies makedirs, write_text, read_text and exists on disk."""
        fs = RealFileSystem()
        directory = str(tmp_path / "store")
        path = str(tmp_path / "store" / "records.json")

        fs.makedirs(directory, exist_ok=True)
        fs.write_text(path, '{"records": []}')

        assert fs.exists(path)
        assert fs.read_text(path) == '{"records": []}'

    def test_record_store_on_disk(self, tmp_path: Path) -> None:
        """Verifies the default store filesystem persists across instances.

        Business context:
        CLI runs are separate processes; what one saves the next loads.

        Arrangement:
        Store rooted in a temp directory.

        Action:
        Save through one store, load through a second.

        Assertion Strategy:
        Second store sees the first store's records.
        """
        first = RecordStore(storage_dir=str(tmp_path))
        first.save_records([])
        second = RecordStore(storage_dir=str(tmp_path))

        assert (tmp_path / "records.json").exists()
        assert second.load_records() == []
