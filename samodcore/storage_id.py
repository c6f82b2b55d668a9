"""Identifiers for the storage behind a repository."""

from __future__ import annotations

import uuid
from dataclasses import dataclass


class StorageIdError(ValueError):
    """Raised when a storage ID has an invalid format."""

    def __init__(self, message: str = "Invalid storage ID format") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class StorageId:
    """Identifies the underlying storage of a peer."""

    value: str

    @classmethod
    def generate(cls, rng) -> StorageId:
        """Create a random version 4 UUID storage ID using ``rng``."""
        raw = rng.getrandbits(128).to_bytes(16, "big")
        return cls.from_uuid(uuid.UUID(bytes=raw, version=4))

    @classmethod
    def from_uuid(cls, value: uuid.UUID) -> StorageId:
        """The hyphenated lower-case form of ``value``."""
        return cls(str(value))

    def __str__(self) -> str:
        return self.value