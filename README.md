# samodcore

Building blocks for an automerge-repo compatible synchronisation engine:
identifiers, hierarchical storage keys, storage task descriptions with an
in-memory store, ephemeral message de-duplication, connection state types and
the CBOR wire protocol that peers exchange.

## Installation

```
pip install samodcore
```

To run the test suite:

```
pip install "samodcore[test]"
pytest
```

## Identifiers

```python
import random
from samodcore.document_id import DocumentId
from samodcore.automerge_url import AutomergeUrl

doc_id = DocumentId.generate(random.Random())
text = str(doc_id)                      # base58check encoding of the UUID bytes
assert DocumentId.parse(text) == doc_id

url = AutomergeUrl.from_document_id(doc_id)
print(url)                              # automerge:<id>
deep = AutomergeUrl.parse(f"automerge:{text}/items/0")
print(deep.path)                        # ('items', 0)
```

- `DocumentId.parse` also accepts the legacy hyphenated UUID form and raises
  `BadDocumentId` on anything else. `DocumentId.from_bytes` takes exactly
  sixteen bytes.
- `AutomergeUrl.parse` raises `InvalidUrlError`; path parts that are unsigned
  integers become `int`, the rest stay `str`.
- `samodcore.base58` provides `b58check_encode` and `b58check_decode`
  (Bitcoin alphabet, four-byte double-SHA256 checksum).
- `PeerId` (`PeerId.generate(rng)` gives `peer-<random u64>`) and `StorageId`
  (`StorageId.generate(rng)`, `StorageId.from_uuid(value)`) wrap strings.
- `UnixTimestamp` holds milliseconds since the epoch; add or subtract a
  `datetime.timedelta`, or subtract two timestamps to get a `timedelta`.

Random generators take any object with a `getrandbits` method, such as
`random.Random`.

## Storage keys

```python
from samodcore.storage_key import StorageKey

key = StorageKey.from_parts(["a", "b", "c"])
prefix = StorageKey.from_parts(["a"])
assert prefix.is_prefix_of(key)
assert key.onelevel_deeper(prefix) == StorageKey.from_parts(["a", "b"])
print(key)                              # a/b/c
```

Parts must be non-empty and must not contain `/`; otherwise
`InvalidStorageKey` is raised. `StorageKey.storage_id_path()`,
`incremental_prefix`, `incremental_path`, `snapshot_prefix` and
`snapshot_path` build the keys used for a repository's storage ID and for a
document's changes and snapshots (hashes given as bytes are written as hex).

## Storage tasks

`samodcore.io` describes storage work as `LoadTask`, `LoadRangeTask`,
`PutTask` and `DeleteTask`, with results `LoadResult`, `LoadRangeResult`,
`PutResult` and `DeleteResult`. `IoTask.new(action)` wraps an action with a
fresh `IoTaskId`; `IoResult` pairs a task ID with its payload.
`samodcore.memory_storage.MemoryStorage` performs the tasks against a
dictionary:

```python
from samodcore.io import PutTask, LoadTask, LoadRangeTask
from samodcore.memory_storage import MemoryStorage

storage = MemoryStorage({})
storage.handle_task(PutTask(key=key, value=b"hello"))
print(storage.handle_task(LoadTask(key=key)).value)              # b'hello'
print(storage.handle_task(LoadRangeTask(prefix=prefix)).values)  # {key: b'hello'}
```

## Ephemeral messages

`samodcore.ephemera.EphemeralSession` tags outgoing messages through
`next_message_session_details()` with its session ID and an increasing
counter. `receive_message` returns the message when its count is greater
than any seen before from the same session and `None` otherwise, so gossip
cannot loop forever.

## Connections

`samodcore.network` holds the types that describe connections:
`ConnDirection`, `ConnectionId`, the states `Handshaking` and `Connected`,
`ConnectionInfo`, `PeerDocState`, `PeerMetadata`, `PeerInfo`, and the events
`HandshakeCompleted`, `ConnectionFailed` and `StateChanged`.
`samodcore.document_changed.DocumentChanged` carries a document's new heads.

## Wire protocol

`samodcore.wire_types` defines the messages (`Join`, `Peer`, `Leave`,
`Request`, `Sync`, `DocUnavailable`, `Ephemeral`, `ErrorMessage`,
`RemoteSubscriptionChange`, `RemoteHeadsChanged`); `samodcore.wire_codec`
turns them into CBOR maps and back.

```python
from samodcore.peer_id import PeerId
from samodcore.wire_types import Join
from samodcore.wire_codec import encode, decode

msg = Join(sender_id=PeerId("alice"), supported_protocol_versions=["1"])
assert decode(encode(msg)) == msg
```

Malformed input raises `samodcore.wire_types.DecodeError`. Document IDs are
accepted both as strings and as sixteen raw bytes.

## What this package does not do

It holds no repository engine: there is no loader, no hub or document actor,
no handshake or sync logic, and it does not read or merge automerge documents
itself. It opens no sockets and keeps nothing on disk; `MemoryStorage` lives
only in memory. These pieces are for a caller to build on top of the types
and codec here.