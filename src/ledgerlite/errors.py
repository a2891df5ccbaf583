"""Error taxonomy surfaced by the store and repositories.

Callers (presentation code, scripts) catch these to pick a message; the core
never recovers from them on its own.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for all LedgerLite failures."""


class NotFoundError(LedgerError):
    """A record id was absent from its collection."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection} record {record_id!r} not found")
        self.collection = collection
        self.record_id = record_id


class DuplicateKeyError(LedgerError):
    """An insert or update violated a uniqueness constraint."""

    def __init__(self, collection: str, detail: str):
        super().__init__(f"Duplicate key in {collection}: {detail}")
        self.collection = collection
        self.detail = detail


class StorageUnavailableError(LedgerError):
    """The underlying database could not serve or commit an operation."""


class StorageInitializationError(StorageUnavailableError):
    """The database engine or schema could not be created at startup."""


class ValidationError(LedgerError, ValueError):
    """Field values rejected at the repository boundary."""


__all__ = [
    "DuplicateKeyError",
    "LedgerError",
    "NotFoundError",
    "StorageInitializationError",
    "StorageUnavailableError",
    "ValidationError",
]
