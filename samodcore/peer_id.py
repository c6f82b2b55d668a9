"""Identifiers for peers in the sync network."""

from __future__ import annotations

from dataclasses import dataclass


class PeerIdError(ValueError):
    """Raised when a peer ID has an invalid format."""

    def __init__(self, message: str = "Invalid peer ID format") -> None:
        super().__init__(message)


@dataclass(frozen=True, order=True)
class PeerId:
    """Ephemeral identifier of one running peer instance."""

    value: str

    @classmethod
    def generate(cls, rng) -> PeerId:
        """Create ``peer-<random u64>`` using ``rng``."""
        return cls(f"peer-{rng.getrandbits(64)}")

    def __str__(self) -> str:
        return self.value