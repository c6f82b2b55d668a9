"""Hierarchical keys for the key-value storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple


class InvalidStorageKey(ValueError):
    """Raised when a key component is empty or contains a slash."""

    def __init__(self, message: str = "InvalidStorageKey") -> None:
        super().__init__(message)


def _check_component(component: str) -> str:
    if not component or "/" in component:
        raise InvalidStorageKey()
    return component


def _hash_text(value) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


@dataclass(frozen=True)
class StorageKey:
    """A path-like key made of string components."""

    parts: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))

    @classmethod
    def storage_id_path(cls) -> StorageKey:
        return cls(("storage-adapter-id",))

    @classmethod
    def incremental_prefix(cls, doc_id) -> StorageKey:
        return cls((str(doc_id), "incremental"))

    @classmethod
    def incremental_path(cls, doc_id, change_hash) -> StorageKey:
        """Key of one incremental change; bytes hashes are written as hex."""
        return cls((str(doc_id), "incremental", _hash_text(change_hash)))

    @classmethod
    def snapshot_prefix(cls, doc_id) -> StorageKey:
        return cls((str(doc_id), "snapshot"))

    @classmethod
    def snapshot_path(cls, doc_id, compaction_hash) -> StorageKey:
        """Key of one snapshot; bytes hashes are written as hex."""
        return cls((str(doc_id), "snapshot", _hash_text(compaction_hash)))

    @classmethod
    def from_parts(cls, parts: Iterable[str]) -> StorageKey:
        """Build a key, rejecting empty components and components with '/'."""
        if isinstance(parts, str):
            raise TypeError("parts must be an iterable of strings, not a string")
        return cls(tuple(_check_component(part) for part in parts))

    def is_prefix_of(self, other: StorageKey) -> bool:
        return other.parts[: len(self.parts)] == self.parts

    def onelevel_deeper(self, prefix: StorageKey) -> Optional[StorageKey]:
        """This key cut to one component more than ``prefix``, if it lies below it."""
        if prefix.is_prefix_of(self) and len(self.parts) > len(prefix.parts):
            return StorageKey(self.parts[: len(prefix.parts) + 1])
        return None

    def with_suffix(self, suffix: StorageKey) -> StorageKey:
        return StorageKey(self.parts + suffix.parts)

    def with_component(self, component: str) -> StorageKey:
        return StorageKey(self.parts + (_check_component(component),))

    def __iter__(self) -> Iterator[str]:
        return iter(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def __str__(self) -> str:
        return "/".join(self.parts)