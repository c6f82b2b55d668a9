"""CBOR encoding and decoding of wire messages."""

from __future__ import annotations

from typing import Any, Dict, List

import cbor2

from samodcore.document_id import BadDocumentId, DocumentId
from samodcore.peer_id import PeerId
from samodcore.storage_id import StorageId
from samodcore.wire_types import (
    DecodeError,
    DocUnavailable,
    Ephemeral,
    ErrorMessage,
    HeadsInfo,
    Join,
    Leave,
    Peer,
    PeerMetadata,
    RemoteHeadsChanged,
    RemoteSubscriptionChange,
    Request,
    Sync,
    WireMessage,
)

_U64_LIMIT = 2**64
_INDEFINITE_MAP = 0xBF

_STRING_KEYS = frozenset(
    {"type", "senderId", "targetId", "selectedProtocolVersion", "message", "sessionId"}
)
_STRING_ARRAY_KEYS = frozenset({"supportedProtocolVersions", "add", "remove"})


# Encoding


def _u64(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < _U64_LIMIT:
        raise ValueError(f"value {value!r} does not fit in an unsigned 64-bit integer")
    return value


def _metadata_map(metadata: PeerMetadata) -> Dict[str, Any]:
    encoded: Dict[str, Any] = {}
    if metadata.storage_id is not None:
        encoded["storageId"] = str(metadata.storage_id)
    encoded["isEphemeral"] = bool(metadata.is_ephemeral)
    return encoded


def _new_heads_map(new_heads: Dict[StorageId, HeadsInfo]) -> Dict[str, Any]:
    return {
        str(storage_id): {
            "heads": list(info.heads),
            "timestamp": _u64(info.timestamp),
        }
        for storage_id, info in new_heads.items()
    }


def _as_map(message: WireMessage) -> Dict[str, Any]:
    match message:
        case Join():
            fields: Dict[str, Any] = {
                "type": Join.message_type,
                "senderId": str(message.sender_id),
                "supportedProtocolVersions": list(message.supported_protocol_versions),
            }
            if message.metadata is not None:
                fields["metadata"] = _metadata_map(message.metadata)
            return fields
        case Peer():
            fields = {
                "type": Peer.message_type,
                "senderId": str(message.sender_id),
                "selectedProtocolVersion": message.selected_protocol_version,
                "targetId": str(message.target_id),
            }
            if message.metadata is not None:
                fields["metadata"] = _metadata_map(message.metadata)
            return fields
        case Leave():
            return {"type": Leave.message_type, "senderId": str(message.sender_id)}
        case Request() | Sync():
            return {
                "type": message.message_type,
                "documentId": str(message.document_id),
                "senderId": str(message.sender_id),
                "targetId": str(message.target_id),
                "data": bytes(message.data),
            }
        case DocUnavailable():
            return {
                "type": DocUnavailable.message_type,
                "senderId": str(message.sender_id),
                "targetId": str(message.target_id),
                "documentId": str(message.document_id),
            }
        case Ephemeral():
            return {
                "type": Ephemeral.message_type,
                "senderId": str(message.sender_id),
                "targetId": str(message.target_id),
                "count": _u64(message.count),
                "sessionId": message.session_id,
                "documentId": str(message.document_id),
                "data": bytes(message.data),
            }
        case ErrorMessage():
            return {"type": ErrorMessage.message_type, "message": message.message}
        case RemoteSubscriptionChange():
            fields = {
                "type": RemoteSubscriptionChange.message_type,
                "senderId": str(message.sender_id),
                "targetId": str(message.target_id),
            }
            if message.add is not None:
                fields["add"] = [str(storage_id) for storage_id in message.add]
            fields["remove"] = [str(storage_id) for storage_id in message.remove]
            return fields
        case RemoteHeadsChanged():
            return {
                "type": RemoteHeadsChanged.message_type,
                "senderId": str(message.sender_id),
                "targetId": str(message.target_id),
                "documentId": str(message.document_id),
                "newHeads": _new_heads_map(message.new_heads),
            }
    raise TypeError(f"not a wire message: {message!r}")


def encode(message: WireMessage) -> bytes:
    """Encode ``message`` as a CBOR map in the wire format."""
    return cbor2.dumps(_as_map(message))


# Decoding


def _type_error(expected: str, value: Any) -> DecodeError:
    return DecodeError(f"unexpected type {type(value).__name__}, expected {expected}")


def _expect_str(value: Any) -> str:
    if not isinstance(value, str):
        raise _type_error("text string", value)
    return value


def _expect_bytes(value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise _type_error("byte string", value)
    return bytes(value)


def _expect_u64(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_error("unsigned integer", value)
    if not 0 <= value < _U64_LIMIT:
        raise DecodeError(f"integer {value} out of range for u64")
    return value


def _expect_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise _type_error("bool", value)
    return value


def _expect_map(value: Any) -> Dict[Any, Any]:
    if not isinstance(value, dict):
        raise _type_error("map", value)
    return value


def _expect_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise _type_error("array", value)
    return [_expect_str(item) for item in value]


def _decode_metadata(value: Any) -> PeerMetadata:
    storage_id = None
    is_ephemeral = False
    for key, item in _expect_map(value).items():
        match _expect_str(key):
            case "storageId":
                storage_id = StorageId(_expect_str(item))
            case "isEphemeral":
                is_ephemeral = _expect_bool(item)
    return PeerMetadata(storage_id=storage_id, is_ephemeral=is_ephemeral)


def _decode_new_heads(value: Any) -> Dict[StorageId, HeadsInfo]:
    new_heads: Dict[StorageId, HeadsInfo] = {}
    for key, entry in _expect_map(value).items():
        storage_id = StorageId(_expect_str(key))
        heads: List[str] = []
        timestamp = 0
        for field_key, item in _expect_map(entry).items():
            match _expect_str(field_key):
                case "heads":
                    heads.extend(_expect_str_list(item))
                case "timestamp":
                    timestamp = _expect_u64(item)
        new_heads[storage_id] = HeadsInfo(heads=heads, timestamp=timestamp)
    return new_heads


def _collect_fields(raw: Dict[Any, Any]) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for key, value in raw.items():
        key = _expect_str(key)
        if key in _STRING_KEYS:
            fields[key] = _expect_str(value)
        elif key == "documentId":
            fields[key] = value if isinstance(value, str) else _expect_bytes(value)
        elif key in _STRING_ARRAY_KEYS:
            fields[key] = _expect_str_list(value)
        elif key == "data":
            fields[key] = _expect_bytes(value)
        elif key in ("count", "timestamp"):
            fields[key] = _expect_u64(value)
        elif key == "metadata":
            fields[key] = _decode_metadata(value)
        elif key == "newHeads":
            fields[key] = _decode_new_heads(value)
    return fields


def _required(fields: Dict[str, Any], name: str, kind: type) -> Any:
    value = fields.get(name)
    if not isinstance(value, kind):
        raise DecodeError.missing_field(name)
    return value


def _peer_id(fields: Dict[str, Any], name: str) -> PeerId:
    return PeerId(_required(fields, name, str))


def _document_id(fields: Dict[str, Any], name: str) -> DocumentId:
    if name not in fields:
        raise DecodeError.missing_field(name)
    value = fields[name]
    try:
        if isinstance(value, str):
            return DocumentId.parse(value)
        return DocumentId.from_bytes(value)
    except BadDocumentId:
        raise DecodeError.invalid_document_id() from None


def _build(fields: Dict[str, Any]) -> WireMessage:
    message_type = fields.get("type")
    if message_type is None:
        raise DecodeError.missing_type()

    match message_type:
        case "join":
            return Join(
                sender_id=_peer_id(fields, "senderId"),
                supported_protocol_versions=_required(
                    fields, "supportedProtocolVersions", list
                ),
                metadata=fields.get("metadata"),
            )
        case "peer":
            sender_id = _peer_id(fields, "senderId")
            target_id = _peer_id(fields, "targetId")
            return Peer(
                sender_id=sender_id,
                selected_protocol_version=_required(fields, "selectedProtocolVersion", str),
                target_id=target_id,
                metadata=fields.get("metadata"),
            )
        case "leave":
            return Leave(sender_id=_peer_id(fields, "senderId"))
        case "request" | "sync":
            document_id = _document_id(fields, "documentId")
            sender_id = _peer_id(fields, "senderId")
            target_id = _peer_id(fields, "targetId")
            data = _required(fields, "data", bytes)
            kind = Request if message_type == "request" else Sync
            return kind(
                document_id=document_id,
                sender_id=sender_id,
                target_id=target_id,
                data=data,
            )
        case "doc-unavailable":
            sender_id = _peer_id(fields, "senderId")
            target_id = _peer_id(fields, "targetId")
            return DocUnavailable(
                sender_id=sender_id,
                target_id=target_id,
                document_id=_document_id(fields, "documentId"),
            )
        case "ephemeral":
            sender_id = _peer_id(fields, "senderId")
            target_id = _peer_id(fields, "targetId")
            count = _required(fields, "count", int)
            session_id = _required(fields, "sessionId", str)
            document_id = _document_id(fields, "documentId")
            return Ephemeral(
                sender_id=sender_id,
                target_id=target_id,
                count=count,
                session_id=session_id,
                document_id=document_id,
                data=_required(fields, "data", bytes),
            )
        case "error":
            return ErrorMessage(message=_required(fields, "message", str))
        case "remote-subscription-change":
            sender_id = _peer_id(fields, "senderId")
            target_id = _peer_id(fields, "targetId")
            add = fields.get("add")
            remove = _required(fields, "remove", list)
            return RemoteSubscriptionChange(
                sender_id=sender_id,
                target_id=target_id,
                add=None if add is None else [StorageId(s) for s in add],
                remove=[StorageId(s) for s in remove],
            )
        case "remote-heads-changed":
            sender_id = _peer_id(fields, "senderId")
            target_id = _peer_id(fields, "targetId")
            document_id = _document_id(fields, "documentId")
            return RemoteHeadsChanged(
                sender_id=sender_id,
                target_id=target_id,
                document_id=document_id,
                new_heads=_required(fields, "newHeads", dict),
            )
    raise DecodeError.unknown_type(message_type)


def decode(data: bytes) -> WireMessage:
    """Decode one wire message from CBOR ``data``.

    Raises DecodeError if the data is not a well-formed message.
    """
    data = bytes(data)
    if data[:1] == bytes([_INDEFINITE_MAP]):
        raise DecodeError.missing_len()
    try:
        raw = cbor2.loads(data)
    except (cbor2.CBORDecodeError, ValueError, TypeError, EOFError) as exc:
        raise DecodeError(str(exc) or "malformed CBOR") from None
    return _build(_collect_fields(_expect_map(raw)))