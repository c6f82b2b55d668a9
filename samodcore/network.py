"""Connections, their state, and the events that describe their lifecycle."""

from __future__ import annotations

import enum
import itertools
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from samodcore import wire_types
from samodcore.document_id import DocumentId
from samodcore.peer_id import PeerId
from samodcore.storage_id import StorageId
from samodcore.unix_timestamp import UnixTimestamp

_connection_counter = itertools.count()
_connection_counter_lock = threading.Lock()


class ConnDirection(enum.Enum):
    """Whether a connection was initiated locally or accepted from a peer."""

    OUTGOING = "outgoing"
    INCOMING = "incoming"


@dataclass(frozen=True)
class ConnectionId:
    """Process-wide unique identifier of a network connection."""

    value: int

    @classmethod
    def next(cls) -> ConnectionId:
        """Allocate the next unused connection ID (wraps like a u32)."""
        with _connection_counter_lock:
            return cls(next(_connection_counter) % 2**32)


@dataclass(frozen=True)
class Handshaking:
    """Peer IDs are still being exchanged."""


@dataclass(frozen=True)
class Connected:
    """Peer IDs are exchanged and documents are being synchronised."""

    their_peer_id: PeerId


ConnectionState = Union[Handshaking, Connected]


@dataclass
class PeerDocState:
    """Synchronisation state of one (peer, document) pair."""

    last_received: Optional[UnixTimestamp] = None
    last_sent: Optional[UnixTimestamp] = None
    last_sent_heads: Optional[Tuple] = None
    last_acked_heads: Optional[Tuple] = None

    @classmethod
    def empty(cls) -> PeerDocState:
        return cls()


@dataclass
class ConnectionInfo:
    """Information about one live connection."""

    id: ConnectionId
    last_received: Optional[UnixTimestamp] = None
    last_sent: Optional[UnixTimestamp] = None
    docs: Dict[DocumentId, PeerDocState] = field(default_factory=dict)
    state: ConnectionState = field(default_factory=Handshaking)


@dataclass(frozen=True)
class PeerMetadata:
    """Metadata about a peer learned in the handshake."""

    is_ephemeral: bool

    def to_wire(self, storage_id: Optional[StorageId]) -> wire_types.PeerMetadata:
        """The wire form, carrying ``storage_id`` alongside."""
        return wire_types.PeerMetadata(storage_id=storage_id, is_ephemeral=self.is_ephemeral)

    @classmethod
    def from_wire(cls, wire: wire_types.PeerMetadata) -> PeerMetadata:
        return cls(is_ephemeral=wire.is_ephemeral)


@dataclass(frozen=True)
class PeerInfo:
    """Information about a peer after a successful handshake."""

    peer_id: PeerId
    metadata: Optional[PeerMetadata]
    protocol_version: str


@dataclass(frozen=True)
class HandshakeCompleted:
    """The handshake with a peer finished and the connection is established."""

    connection_id: ConnectionId
    peer_info: PeerInfo


@dataclass(frozen=True)
class ConnectionFailed:
    """The connection failed or was disconnected."""

    connection_id: ConnectionId
    error: str


@dataclass(frozen=True)
class StateChanged:
    """Some part of the connection state changed."""

    connection_id: ConnectionId
    new_state: ConnectionInfo


ConnectionEvent = Union[HandshakeCompleted, ConnectionFailed, StateChanged]