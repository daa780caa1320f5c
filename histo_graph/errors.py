"""
Exceptions raised by the object store.

Low-level ``OSError`` and decoding failures are wrapped into this hierarchy
with ``raise ... from exc`` so callers can catch a single base class.
"""

from __future__ import annotations

from pathlib import Path


class StorageError(Exception):
    """Base exception for object store errors."""

    pass


class StorageIOError(StorageError):
    """Filesystem error while reading or writing an object."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ObjectNotFoundError(StorageIOError):
    """A hashed object or named snapshot does not exist."""

    pass


class SerializationError(StorageError):
    """Stored bytes are malformed, truncated, or do not match their hash."""

    pass
