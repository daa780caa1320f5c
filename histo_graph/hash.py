"""
Content hash of a serialized object.

A Hash is the SHA-256 digest of the exact bytes that get written to disk.
Its hex form is used as the filename of hash-addressed objects.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

HASH_SIZE = 32


@dataclass(frozen=True)
class Hash:
    """SHA-256 digest of a serialized object."""

    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != HASH_SIZE:
            raise ValueError(f"Hash digest must be {HASH_SIZE} bytes, got {len(self.digest)}")

    @classmethod
    def compute(cls, content: bytes) -> Hash:
        """Hash the given serialized content."""
        return cls(hashlib.sha256(content).digest())

    @classmethod
    def from_hex(cls, text: str) -> Hash:
        if len(text) != HASH_SIZE * 2:
            raise ValueError(f"Hash text must be {HASH_SIZE * 2} hex characters: {text!r}")
        return cls(bytes.fromhex(text))

    def hex(self) -> str:
        """Lowercase hex form, used as a filename."""
        return self.digest.hex()

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Hash({self.hex()!r})"
