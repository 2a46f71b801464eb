"""Persistence for record collections."""

from storage.json_store import (
    JsonStore,
    StoreError,
    StoreParseError,
    StoreReadError,
    StoreWriteError,
)

__all__ = ["JsonStore", "StoreError", "StoreParseError", "StoreReadError", "StoreWriteError"]
