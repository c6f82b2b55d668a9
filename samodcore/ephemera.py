"""Ephemeral messages and the session bookkeeping that stops them looping."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from samodcore.peer_id import PeerId


@dataclass(frozen=True)
class EphemeralSessionId:
    """Identifies the session a peer tags its ephemeral messages with."""

    value: str

    @classmethod
    def generate(cls, rng) -> EphemeralSessionId:
        """A random version 4 UUID string drawn from ``rng``."""
        raw = rng.getrandbits(128).to_bytes(16, "big")
        return cls(str(uuid.UUID(bytes=raw, version=4)))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EphemeralMessage:
    """A message that is gossiped to peers but never stored."""

    sender_id: PeerId
    session_id: EphemeralSessionId
    count: int
    data: bytes


@dataclass(frozen=True)
class OutgoingSessionDetails:
    """The counter and session ID to tag an outgoing message with."""

    counter: int
    session_id: EphemeralSessionId


class EphemeralSession:
    """Tracks the local session counter and the highest count seen per session."""

    def __init__(self, rng) -> None:
        self._counter = 0
        self._session_id = EphemeralSessionId.generate(rng)
        self._session_counts: Dict[EphemeralSessionId, int] = {}

    @property
    def session_id(self) -> EphemeralSessionId:
        return self._session_id

    def next_message_session_details(self) -> OutgoingSessionDetails:
        """Advance the local counter and return the tags for the next message."""
        self._counter += 1
        return OutgoingSessionDetails(self._counter, self._session_id)

    def receive_message(self, msg: EphemeralMessage) -> Optional[EphemeralMessage]:
        """Return ``msg`` if it is new for its session, otherwise None.

        Messages whose count is not greater than the largest already seen
        from the same session are dropped, so gossip cannot echo forever.
        """
        current = self._session_counts.get(msg.session_id)
        if current is not None and current >= msg.count:
            return None
        self._session_counts[msg.session_id] = msg.count
        return msg