"""JSON-array backing store for a record collection."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Callable, Generic, TypeVar

from common.logging_setup import get_logger
from records.base import Record

__all__ = [
    "JsonStore",
    "StoreError",
    "StoreParseError",
    "StoreReadError",
    "StoreWriteError",
]

logger = get_logger(__name__)

R = TypeVar("R", bound=Record)


class StoreError(Exception):
    """Base class for backing store failures."""


class StoreReadError(StoreError):
    """The store file is missing or cannot be read."""


class StoreParseError(StoreError):
    """The store file is not a JSON array of the expected record kind."""


class StoreWriteError(StoreError):
    """The store file cannot be written."""


class JsonStore(Generic[R]):
    """
    Whole-file JSON store holding one record kind.
    
    Every mutation reads the full collection, applies one change and writes
    the full collection back. There is no locking, so concurrent writers in
    other processes can clobber each other.
    """
    
    def __init__(
        self,
        path: str | Path,
        record_type: type[R],
        retries: int = 3,
        retry_backoff: float = 0.05,
    ) -> None:
        """
        Initialize the store.
        
        Args:
            path: Location of the JSON array file
            record_type: Record class used to decode entries
            retries: Extra attempts for transient I/O errors
            retry_backoff: Initial delay between attempts, doubled each retry
        """
        self.path = Path(path)
        self.record_type = record_type
        self.retries = max(0, retries)
        self.retry_backoff = retry_backoff
    
    def ensure_exists(self) -> bool:
        """Create an empty store (and its directory) if none exists.
        
        Returns:
            True if a new file was created
        """
        if self.path.exists():
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StoreWriteError(f"cannot create store {self.path}: {exc}") from exc
        logger.info(f"Created empty store at {self.path}")
        return True
    
    def read_all(self) -> list[R]:
        """Read and decode the whole collection."""
        content = self._with_retry("read", self.path.read_bytes)
        try:
            raw = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreParseError(f"error parsing {self.path}: {exc}") from exc
        if not isinstance(raw, list):
            raise StoreParseError(
                f"error parsing {self.path}: expected a JSON array, got {type(raw).__name__}"
            )
        records: list[R] = []
        for index, entry in enumerate(raw):
            if not isinstance(entry, dict):
                raise StoreParseError(f"error parsing {self.path}: entry {index} is not an object")
            try:
                records.append(self.record_type.from_dict(entry))
            except (KeyError, TypeError, ValueError) as exc:
                raise StoreParseError(
                    f"error parsing {self.path}: entry {index} is not a valid "
                    f"{self.record_type.kind_name()}: {exc}"
                ) from exc
        return records
    
    def write_all(self, records: list[R]) -> None:
        """Serialize the collection and overwrite the store file."""
        payload = json.dumps([record.to_dict() for record in records], separators=(",", ":"))
        
        def write() -> None:
            try:
                self.path.write_text(payload, encoding="utf-8")
            except OSError as exc:
                raise StoreWriteError(f"error writing {self.path}: {exc}") from exc
        
        self._with_retry("write", write)
    
    def append(self, record: R) -> list[R]:
        """Append one record and return the collection as stored."""
        records = self.read_all()
        records.append(record)
        self.write_all(records)
        logger.debug(f"Appended {self.record_type.kind_name()} {record.display_name()!r}")
        return records
    
    def remove_at(self, index: int) -> list[R]:
        """Remove the record at ``index`` and return the collection as stored."""
        records = self.read_all()
        if not 0 <= index < len(records):
            raise IndexError(f"no {self.record_type.kind_name()} at index {index}")
        removed = records.pop(index)
        self.write_all(records)
        logger.debug(f"Removed {self.record_type.kind_name()} {removed.display_name()!r}")
        return records
    
    def update_at(self, index: int, change: Callable[[R], None]) -> R:
        """Apply ``change`` to the stored record at ``index`` and persist it.
        
        Returns:
            The updated record as written to the store
        """
        records = self.read_all()
        if not 0 <= index < len(records):
            raise IndexError(f"no {self.record_type.kind_name()} at index {index}")
        change(records[index])
        self.write_all(records)
        return records[index]
    
    def _with_retry(self, action: str, operation: Callable):
        delay = self.retry_backoff
        attempt = 0
        while True:
            try:
                return operation()
            except FileNotFoundError as exc:
                raise StoreReadError(f"error reading {self.path}: {exc}") from exc
            except (OSError, StoreWriteError) as exc:
                if attempt >= self.retries:
                    if isinstance(exc, StoreError):
                        raise
                    raise StoreReadError(f"error reading {self.path}: {exc}") from exc
                attempt += 1
                logger.warning(
                    f"Transient {action} failure on {self.path} "
                    f"(attempt {attempt}/{self.retries}): {exc}"
                )
                time.sleep(delay)
                delay *= 2
