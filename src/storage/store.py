"""In-memory string store with JSON-file persistence.

The store owns the collection. Readers get snapshot copies, so the match engine never sees a
collection that is being mutated. Persistence is explicit: `load()` at startup and `save()` after
each mutation (skipped when the store has no path).
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from src.analysis.properties import sha256_hex
from src.analysis.schema import AnalyzedString

logger = logging.getLogger(__name__)

_RECORDS_ADAPTER = TypeAdapter(list[AnalyzedString])


class StoreError(RuntimeError):
    """Raised when the store cannot load or persist its records."""


class DuplicateStringError(StoreError):
    """Raised when a string with the same value (hash) is already stored."""


class StringNotFoundError(StoreError):
    """Raised when a requested string is not stored."""


class StringStore:
    """Hash-keyed collection of `AnalyzedString` records, kept in insertion order."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._records: dict[str, AnalyzedString] = {}
        # Re-entrant: `load` and the mutators call `save` while holding it.
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def load(self) -> None:
        """Load records from the JSON file.

        A missing file starts an empty store and creates the file. A file that cannot be read or
        decoded raises `StoreError` rather than being overwritten.
        """

        if self.path is None:
            return

        if not self.path.exists():
            logger.info("no data file at %s; starting empty", self.path)
            with self._lock:
                self._records = {}
                self.save()
            return

        try:
            records = _RECORDS_ADAPTER.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            raise StoreError(f"cannot load strings from {self.path}: {exc}") from exc

        with self._lock:
            self._records = {record.id: record for record in records}
        logger.info("loaded strings count=%d path=%s", len(records), self.path)

    def save(self) -> None:
        """Write every record to the JSON file (no-op for an in-memory store)."""

        if self.path is None:
            return

        with self._lock:
            payload = _RECORDS_ADAPTER.dump_json(list(self._records.values()), indent=2)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_bytes(payload)
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StoreError(f"cannot save strings to {self.path}: {exc}") from exc

    def all(self) -> list[AnalyzedString]:
        """Return a snapshot of every record in insertion order."""

        with self._lock:
            return list(self._records.values())

    def get_by_id(self, record_id: str) -> AnalyzedString | None:
        with self._lock:
            return self._records.get(record_id)

    def get_by_value(self, value: str) -> AnalyzedString | None:
        return self.get_by_id(sha256_hex(value))

    def add(self, record: AnalyzedString, *, persist: bool = True) -> AnalyzedString:
        """Add a record.

        Raises:
            DuplicateStringError: If a record with the same id exists.
        """

        with self._lock:
            if record.id in self._records:
                raise DuplicateStringError("String already exists in the system")
            self._records[record.id] = record
            if persist:
                self.save()
        return record

    def delete_by_value(self, value: str) -> AnalyzedString:
        """Remove and return the record holding `value`.

        Raises:
            StringNotFoundError: If no record holds `value`.
        """

        record_id = sha256_hex(value)
        with self._lock:
            record = self._records.pop(record_id, None)
            if record is None:
                raise StringNotFoundError("String does not exist in the system")
            self.save()
        return record
