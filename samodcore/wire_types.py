"""Message types exchanged between peers over the wire."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Tuple, Union

from samodcore.document_id import DocumentId
from samodcore.peer_id import PeerId
from samodcore.storage_id import StorageId


class DecodeError(ValueError):
    """Raised when bytes received from a peer are not a valid wire message."""

    def __init__(self, message: str, field_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field_name = field_name

    def __str__(self) -> str:
        return self.message

    @classmethod
    def missing_len(cls) -> DecodeError:
        return cls("missing len")

    @classmethod
    def invalid_format(cls) -> DecodeError:
        return cls("invalid format")

    @classmethod
    def missing_type(cls) -> DecodeError:
        return cls("no type field")

    @classmethod
    def missing_field(cls, name: str) -> DecodeError:
        return cls(f"missing field: {name}", field_name=name)

    @classmethod
    def invalid_document_id(cls) -> DecodeError:
        return cls("invalid document ID")

    @classmethod
    def unknown_type(cls, name: str) -> DecodeError:
        return cls(f"unknown type {name}", field_name=name)


@dataclass(frozen=True)
class PeerMetadata:
    """Metadata sent in join or peer messages."""

    storage_id: Optional[StorageId] = None
    is_ephemeral: bool = False


@dataclass(frozen=True)
class HeadsInfo:
    """Document heads (base64 hash strings) and the time they were reported."""

    heads: Tuple[str, ...] = ()
    timestamp: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "heads", tuple(self.heads))


def _as_bytes(instance, name: str) -> None:
    object.__setattr__(instance, name, bytes(getattr(instance, name)))


@dataclass(frozen=True)
class Join:
    """Sent by the initiating peer in the handshake phase."""

    message_type: ClassVar[str] = "join"

    sender_id: PeerId
    supported_protocol_versions: Tuple[str, ...]
    metadata: Optional[PeerMetadata] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "supported_protocol_versions", tuple(self.supported_protocol_versions)
        )


@dataclass(frozen=True)
class Peer:
    """Sent by the receiving peer in answer to a join message."""

    message_type: ClassVar[str] = "peer"

    sender_id: PeerId
    selected_protocol_version: str
    target_id: PeerId
    metadata: Optional[PeerMetadata] = None


@dataclass(frozen=True)
class Leave:
    """Advisory message sent by a peer that is about to disconnect."""

    message_type: ClassVar[str] = "leave"

    sender_id: PeerId


@dataclass(frozen=True)
class Request:
    """The sender asks to begin syncing a document."""

    message_type: ClassVar[str] = "request"

    document_id: DocumentId
    sender_id: PeerId
    target_id: PeerId
    data: bytes

    def __post_init__(self) -> None:
        _as_bytes(self, "data")


@dataclass(frozen=True)
class Sync:
    """A sync message about a document."""

    message_type: ClassVar[str] = "sync"

    document_id: DocumentId
    sender_id: PeerId
    target_id: PeerId
    data: bytes

    def __post_init__(self) -> None:
        _as_bytes(self, "data")


@dataclass(frozen=True)
class DocUnavailable:
    """The sender does not have the document."""

    message_type: ClassVar[str] = "doc-unavailable"

    sender_id: PeerId
    target_id: PeerId
    document_id: DocumentId


@dataclass(frozen=True)
class Ephemeral:
    """An ephemeral message for a document, tagged with session and counter."""

    message_type: ClassVar[str] = "ephemeral"

    sender_id: PeerId
    target_id: PeerId
    count: int
    session_id: str
    document_id: DocumentId
    data: bytes

    def __post_init__(self) -> None:
        _as_bytes(self, "data")


@dataclass(frozen=True)
class ErrorMessage:
    """Informs the other end of a protocol error."""

    message_type: ClassVar[str] = "error"

    message: str


@dataclass(frozen=True)
class RemoteSubscriptionChange:
    """Changes the set of storage IDs the sender wants to hear about."""

    message_type: ClassVar[str] = "remote-subscription-change"

    sender_id: PeerId
    target_id: PeerId
    add: Optional[Tuple[StorageId, ...]] = None
    remove: Tuple[StorageId, ...] = ()

    def __post_init__(self) -> None:
        if self.add is not None:
            object.__setattr__(self, "add", tuple(self.add))
        object.__setattr__(self, "remove", tuple(self.remove))


@dataclass(frozen=True)
class RemoteHeadsChanged:
    """Tells the receiver that some storage has new heads for a document."""

    message_type: ClassVar[str] = "remote-heads-changed"

    sender_id: PeerId
    target_id: PeerId
    document_id: DocumentId
    new_heads: Dict[StorageId, HeadsInfo] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "new_heads", dict(self.new_heads))


WireMessage = Union[
    Join,
    Peer,
    Leave,
    Request,
    Sync,
    DocUnavailable,
    Ephemeral,
    ErrorMessage,
    RemoteSubscriptionChange,
    RemoteHeadsChanged,
]