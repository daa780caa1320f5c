"""
StoredFile: the bytes, hash and kind of one object on its way to or from disk.

A StoredFile only lives for the duration of a single read or write; only its
content is persisted. It also knows where objects of its kind live under a
base directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import codec
from .errors import SerializationError
from .hash import Hash
from .objects import HashEdge, ObjectKind

LOG = logging.getLogger("file")

_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")

# Prefix of in-flight write files; never a valid snapshot name.
TEMP_PREFIX = ".tmp-"


def kind_dir(base_path: str | os.PathLike, kind: ObjectKind) -> Path:
    """Directory holding objects of ``kind`` under ``base_path``."""
    return Path(base_path) / kind.subdir


def hash_path(base_path: str | os.PathLike, kind: ObjectKind, hash_: Hash) -> Path:
    """Path of the hash-addressed object ``hash_`` of ``kind``."""
    if kind.is_named:
        raise ValueError(f"Objects of kind {kind.value!r} are stored by name, not by hash")
    return kind_dir(base_path, kind) / hash_.hex()


def named_path(base_path: str | os.PathLike, kind: ObjectKind, name: str) -> Path:
    """Path of the object stored under ``name``. Only valid for named kinds."""
    if not kind.is_named:
        raise ValueError(f"Objects of kind {kind.value!r} are stored by hash, not by name")
    validate_name(name)
    return kind_dir(base_path, kind) / name


def validate_name(name: str) -> None:
    """Reject snapshot names that are not a single plain path component."""
    if not isinstance(name, str) or not name:
        raise ValueError("Snapshot name must be a non-empty string")
    if name in (".", "..") or any(c in name for c in _FORBIDDEN_NAME_CHARS):
        raise ValueError(f"Invalid snapshot name: {name!r}")
    if name.startswith(TEMP_PREFIX):
        raise ValueError(f"Snapshot name may not start with {TEMP_PREFIX!r}: {name!r}")


@dataclass(frozen=True)
class StoredFile:
    """Serialized content of an object, with its hash and kind."""

    content: bytes
    hash: Hash
    kind: ObjectKind

    @classmethod
    def from_value(cls, kind: ObjectKind, value: Any) -> StoredFile:
        """Serialize ``value`` and hash the result."""
        content = codec.encode(kind, value)
        return cls(content=content, hash=Hash.compute(content), kind=kind)

    @classmethod
    def for_edge(cls, from_id: int, to_id: int) -> StoredFile:
        """
        Build the edge object for ``from_id -> to_id``.

        The endpoint hashes are computed from the endpoints' encodings; the
        vertices themselves need not be stored.
        """
        hash_edge = HashEdge(
            from_hash=cls.from_value(ObjectKind.VERTEX, from_id).hash,
            to_hash=cls.from_value(ObjectKind.VERTEX, to_id).hash,
        )
        return cls.from_value(ObjectKind.EDGE, hash_edge)

    @classmethod
    def from_disk(cls, kind: ObjectKind, content: bytes, hash_: Hash | None = None, verify: bool = False) -> StoredFile:
        """
        Wrap content read from disk.

        For hash-addressed reads ``hash_`` is the hash the file was looked up
        by; with ``verify`` it is checked against the content. Named reads
        pass no hash and get one computed from the content.
        """
        if hash_ is None:
            return cls(content=content, hash=Hash.compute(content), kind=kind)
        if verify:
            actual = Hash.compute(content)
            if actual != hash_:
                LOG.warning("Hash mismatch for %s object %s: content hashes to %s", kind.value, hash_, actual)
                raise SerializationError(f"Content of {kind.value} object {hash_} hashes to {actual}")
        return cls(content=content, hash=hash_, kind=kind)

    def path(self, base_path: str | os.PathLike) -> Path:
        """Hash-addressed path of this file under ``base_path``."""
        return hash_path(base_path, self.kind, self.hash)

    def to_value(self) -> Any:
        """Deserialize the content."""
        return codec.decode(self.kind, self.content)
