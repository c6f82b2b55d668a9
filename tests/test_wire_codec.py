import random

import cbor2
import pytest

from samodcore.document_id import DocumentId
from samodcore.peer_id import PeerId
from samodcore.storage_id import StorageId
from samodcore.wire_codec import decode, encode
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
)

DOC_ID = DocumentId.generate(random.Random(7))


def test_join_message_roundtrip():
    msg = Join(
        sender_id=PeerId("test-peer"),
        supported_protocol_versions=["1"],
        metadata=PeerMetadata(
            storage_id=StorageId.generate(random.Random()), is_ephemeral=False
        ),
    )
    assert decode(encode(msg)) == msg


def test_peer_message_roundtrip():
    msg = Peer(
        sender_id=PeerId("sender"),
        selected_protocol_version="1",
        target_id=PeerId("target"),
        metadata=None,
    )
    assert decode(encode(msg)) == msg


def test_error_message_roundtrip():
    msg = ErrorMessage(message="Protocol error")
    assert decode(encode(msg)) == msg


@pytest.mark.parametrize(
    "msg",
    [
        Leave(sender_id=PeerId("alice")),
        Request(DOC_ID, PeerId("alice"), PeerId("bob"), b"\x01\x02"),
        Sync(DOC_ID, PeerId("alice"), PeerId("bob"), b""),
        DocUnavailable(PeerId("alice"), PeerId("bob"), DOC_ID),
        Ephemeral(PeerId("a"), PeerId("b"), 2**64 - 1, "session", DOC_ID, b"\x09"),
        RemoteSubscriptionChange(PeerId("a"), PeerId("b"), None, [StorageId("s1")]),
        RemoteSubscriptionChange(PeerId("a"), PeerId("b"), [StorageId("x")], []),
        RemoteHeadsChanged(
            PeerId("a"),
            PeerId("b"),
            DOC_ID,
            {StorageId("s1"): HeadsInfo(heads=["aGVhZA=="], timestamp=12345)},
        ),
        Join(PeerId("a"), ["1", "2"], PeerMetadata(storage_id=None, is_ephemeral=True)),
    ],
)
def test_roundtrip_all_variants(msg):
    assert decode(encode(msg)) == msg


def test_leave_encoding_is_pinned():
    assert encode(Leave(sender_id=PeerId("a"))) == (
        b"\xa2\x64type\x65leave\x68senderId\x61a"
    )


def test_document_id_encoded_as_text():
    raw = cbor2.loads(encode(DocUnavailable(PeerId("a"), PeerId("b"), DOC_ID)))
    assert raw["documentId"] == str(DOC_ID)
    assert list(raw) == ["type", "senderId", "targetId", "documentId"]


def test_document_id_accepted_as_bytes():
    data = cbor2.dumps(
        {
            "type": "doc-unavailable",
            "senderId": "a",
            "targetId": "b",
            "documentId": DOC_ID.value.bytes,
        }
    )
    assert decode(data) == DocUnavailable(PeerId("a"), PeerId("b"), DOC_ID)


def test_unknown_keys_are_ignored():
    data = cbor2.dumps({"type": "leave", "senderId": "a", "extra": [1, {"x": 2}]})
    assert decode(data) == Leave(PeerId("a"))


def test_missing_type():
    with pytest.raises(DecodeError) as info:
        decode(cbor2.dumps({"senderId": "a"}))
    assert str(info.value) == "no type field"


def test_unknown_type():
    with pytest.raises(DecodeError) as info:
        decode(cbor2.dumps({"type": "bogus"}))
    assert str(info.value) == "unknown type bogus"


def test_missing_field():
    with pytest.raises(DecodeError) as info:
        decode(cbor2.dumps({"type": "error"}))
    assert str(info.value) == "missing field: message"


def test_missing_remove_field():
    data = cbor2.dumps(
        {"type": "remote-subscription-change", "senderId": "a", "targetId": "b"}
    )
    with pytest.raises(DecodeError) as info:
        decode(data)
    assert info.value.field_name == "remove"


def test_invalid_document_id():
    data = cbor2.dumps(
        {"type": "doc-unavailable", "senderId": "a", "targetId": "b", "documentId": "nope"}
    )
    with pytest.raises(DecodeError) as info:
        decode(data)
    assert str(info.value) == "invalid document ID"


def test_indefinite_map_has_no_length():
    with pytest.raises(DecodeError) as info:
        decode(b"\xbf\x64type\x65leave\x68senderId\x61a\xff")
    assert str(info.value) == "missing len"


def test_wrong_field_type_is_rejected():
    with pytest.raises(DecodeError):
        decode(cbor2.dumps({"type": "leave", "senderId": 5}))


def test_not_a_map_is_rejected():
    with pytest.raises(DecodeError):
        decode(cbor2.dumps([1, 2, 3]))


def test_truncated_data_is_rejected():
    with pytest.raises(DecodeError):
        decode(encode(Leave(PeerId("alice")))[:-3])


def test_count_out_of_range_on_encode():
    msg = Ephemeral(PeerId("a"), PeerId("b"), 2**64, "s", DOC_ID, b"")
    with pytest.raises(ValueError):
        encode(msg)


def test_heads_info_defaults_when_fields_missing():
    data = cbor2.dumps(
        {
            "type": "remote-heads-changed",
            "senderId": "a",
            "targetId": "b",
            "documentId": str(DOC_ID),
            "newHeads": {"s1": {}},
        }
    )
    decoded = decode(data)
    assert decoded.new_heads == {StorageId("s1"): HeadsInfo(heads=(), timestamp=0)}


def test_metadata_defaults_is_ephemeral_false():
    data = cbor2.dumps(
        {
            "type": "join",
            "senderId": "a",
            "supportedProtocolVersions": ["1"],
            "metadata": {"storageId": "abc"},
        }
    )
    decoded = decode(data)
    assert decoded.metadata == PeerMetadata(storage_id=StorageId("abc"), is_ephemeral=False)