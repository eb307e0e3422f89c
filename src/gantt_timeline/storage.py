"""
Record store for gantt-timeline.

PURPOSE: JSON persistence of chart records and the active label/date domain.
AI CONTEXT: The "data controller" of the host side - it feeds build_data_view().

STORAGE STRUCTURE:
    .gantt/
    └── records.json   # {"labels": [...], "dates": [...], "records": [...]}

"labels" and "dates" are optional; when absent the data view derives them
from the records. A bare JSON list is read as the records array.

ERROR HANDLING STRATEGY:
- File not found: Return empty data
- JSON corruption: Log error, return empty data
- Malformed record or unorderable date: Log warning, skip that record
- Write failure: Log error, return False

USAGE:
    # Production
    store = RecordStore()

    # Testing with MockFileSystem
    store = RecordStore(storage_dir="/test", filesystem=mock_fs)
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from .config import Config
from .filesystem import RealFileSystem
from .models import DateAccessor, DomainConfig, Record, default_date_accessor, json_date

if TYPE_CHECKING:
    from .filesystem import FileSystem

__all__ = ["RecordStore"]

logger = logging.getLogger(__name__)


class RecordStore:
    """
    JSON-backed store of records and domain settings.

    DESIGN PRINCIPLES:
    1. Fail-safe reads: Never crash a dashboard on a bad file
    2. Predictable: Always return valid lists and configs
    3. Testable: FileSystem can be injected for mocking

    THREAD SAFETY:
    Not thread-safe. Single writer assumed (one CLI or dashboard process).
    """

    def __init__(
        self,
        storage_dir: str | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """
        Initialize the store and create records.json if missing.

        Args:
            storage_dir: Custom storage path. Default: Config.get_data_dir()
            filesystem: FileSystem implementation. Default: RealFileSystem
        """
        self.storage_dir = storage_dir or Config.get_data_dir()
        self._fs: FileSystem = filesystem or RealFileSystem()
        self.records_file = os.path.join(self.storage_dir, Config.RECORDS_FILE)

        self._initialize_storage()

    def _initialize_storage(self) -> None:
        try:
            self._fs.makedirs(self.storage_dir, exist_ok=True)
            if not self._fs.exists(self.records_file):
                self._write_json(self.records_file, {"records": []})
            logger.info(f"Record store initialized: {self.storage_dir}")
        except OSError as e:
            logger.error(f"Failed to initialize record store: {e}")

    def _read_json(self, file_path: str, default: Any) -> Any:
        try:
            content = self._fs.read_text(file_path)
            return json.loads(content)
        except FileNotFoundError:
            return default
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {file_path}: {e}")
            return default
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            return default

    def _write_json(self, file_path: str, data: Any) -> bool:
        try:
            content = json.dumps(data, indent=2, default=str)
            self._fs.write_text(file_path, content)
            return True
        except OSError as e:
            logger.error(f"Error writing {file_path}: {e}")
            return False

    @staticmethod
    def _normalize_document(data: Any) -> dict[str, Any]:
        """Accept either the full document or a bare records list."""
        if isinstance(data, list):
            return {"records": data}
        if isinstance(data, dict):
            return data
        logger.error(f"Unexpected records document type: {type(data).__name__}")
        return {"records": []}

    @staticmethod
    def _check_date(value: Any, date_accessor: DateAccessor) -> None:
        # Dates become dict keys in the builder and sort keys in the domain
        hash(value)
        date_accessor(value)

    @classmethod
    def parse_records(
        cls,
        items: Iterable[Any],
        date_accessor: DateAccessor = default_date_accessor,
    ) -> list[Record]:
        """
        Parse JSON record mappings, skipping malformed entries.

        An entry is malformed when a key is missing, the value is not
        numeric, or the date cannot be ordered by date_accessor (null,
        a list, a non-ISO string under the default accessor).

        Args:
            items: Iterable of {"label", "date", "value"} mappings.
            date_accessor: Ordering function the records will be built with.

        Returns:
            Successfully parsed records, in input order.
        """
        records = []
        for position, item in enumerate(items):
            try:
                record = Record.from_dict(item)
                cls._check_date(record.date, date_accessor)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed record #{position}: {e}")
                continue
            records.append(record)
        return records

    def _load_document(self) -> dict[str, Any]:
        return self._normalize_document(self._read_json(self.records_file, {"records": []}))

    # =========================================================================
    # RECORD OPERATIONS
    # =========================================================================

    def load_records(self) -> list[Record]:
        """
        Load all stored records.

        Returns:
            List of records. Empty list if the file is missing or corrupt.
        """
        return self.parse_records(self._load_document().get("records") or [])

    def load_domain_config(
        self, date_accessor: DateAccessor = default_date_accessor
    ) -> DomainConfig:
        """
        Load the stored label/date domain.

        Args:
            date_accessor: Ordering function to attach to the config.

        Returns:
            DomainConfig; dates/labels are None when not stored.
        """
        document = self._load_document()
        labels = document.get("labels")
        dates = document.get("dates")
        if dates is not None:
            dates = self._valid_domain_dates(dates, date_accessor)
        return DomainConfig(
            dates=tuple(dates) if dates is not None else None,
            labels=tuple(str(label) for label in labels) if labels is not None else None,
            date_accessor=date_accessor,
        )

    @classmethod
    def _valid_domain_dates(cls, dates: Iterable[Any], date_accessor: DateAccessor) -> list[Any]:
        valid = []
        for value in dates:
            try:
                cls._check_date(value, date_accessor)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid domain date {value!r}: {e}")
                continue
            valid.append(value)
        return valid

    def save_records(
        self,
        records: Iterable[Record],
        labels: Sequence[str] | None = None,
        dates: Sequence[Any] | None = None,
    ) -> bool:
        """
        Replace the stored records and domain.

        Args:
            records: Records to store.
            labels: Label domain in display order; None leaves it derived.
            dates: Date domain; None leaves it derived.

        Returns:
            True on success.
        """
        document: dict[str, Any] = {}
        if labels is not None:
            document["labels"] = list(labels)
        if dates is not None:
            document["dates"] = [json_date(d) for d in dates]
        document["records"] = [r.to_dict() for r in records]
        return self._write_json(self.records_file, document)

    def add_records(self, records: Iterable[Record]) -> bool:
        """
        Append records, keeping the stored domain.

        Args:
            records: Records to append.

        Returns:
            True on success.
        """
        document = self._load_document()
        existing = self.parse_records(document.get("records") or [])
        existing.extend(records)
        return self.save_records(existing, document.get("labels"), document.get("dates"))

    def import_file(self, path: str) -> int:
        """
        Append the records of a JSON file to the store.

        The file may be a bare records list or a full records document;
        a document's "labels" and "dates" replace the stored domain.

        Business context: Backs the CLI import command, so exports from
        spreadsheets or other tools can be charted without code.

        Args:
            path: Path of the JSON file to import.

        Returns:
            Number of records imported.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
        """
        incoming = self._normalize_document(json.loads(self._fs.read_text(path)))
        records = self.parse_records(incoming.get("records") or [])

        document = self._load_document()
        merged = self.parse_records(document.get("records") or [])
        merged.extend(records)
        labels = incoming.get("labels", document.get("labels"))
        dates = incoming.get("dates", document.get("dates"))
        self.save_records(merged, labels, dates)

        logger.info(f"Imported {len(records)} records from {path}")
        return len(records)

    # =========================================================================
    # MAINTENANCE OPERATIONS
    # =========================================================================

    def clear(self) -> bool:
        """
        Reset the store to no records and no stored domain.

        Returns:
            True on success.
        """
        success = self._write_json(self.records_file, {"records": []})
        if success:
            logger.info("Record store cleared")
        return success
