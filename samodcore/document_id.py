"""Identifiers for automerge documents."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from samodcore.base58 import b58check_decode, b58check_encode


class BadDocumentId(ValueError):
    """Raised when bytes or text do not describe a document ID."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Invalid document ID: {self.detail}"


@dataclass(frozen=True, order=True, repr=False)
class DocumentId:
    """Unique identifier for an automerge document, backed by a UUID.

    Its text form is the base58check encoding of the UUID's bytes.
    """

    value: uuid.UUID

    @classmethod
    def generate(cls, rng) -> DocumentId:
        """Create a random (version 4) document ID from ``rng``."""
        raw = rng.getrandbits(128).to_bytes(16, "big")
        return cls(uuid.UUID(bytes=raw, version=4))

    @classmethod
    def from_bytes(cls, data: bytes) -> DocumentId:
        """Build a document ID from exactly sixteen UUID bytes."""
        data = bytes(data)
        if len(data) != 16:
            raise BadDocumentId(
                f"invalid uuid: invalid length: expected 16 bytes, found {len(data)}"
            )
        return cls(uuid.UUID(bytes=data))

    @classmethod
    def parse(cls, text: str) -> DocumentId:
        """Parse a base58check document ID, falling back to a legacy UUID string."""
        try:
            raw = b58check_decode(text)
        except ValueError:
            try:
                return cls(uuid.UUID(text))
            except (ValueError, TypeError, AttributeError):
                raise BadDocumentId(
                    "expected either a bs58-encoded document ID or a UUID"
                ) from None
        return cls.from_bytes(raw)

    def __str__(self) -> str:
        return b58check_encode(self.value.bytes)

    def __repr__(self) -> str:
        return f"DocumentId({self})"