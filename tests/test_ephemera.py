import random
import uuid

from samodcore.ephemera import (
    EphemeralMessage,
    EphemeralSession,
    EphemeralSessionId,
    OutgoingSessionDetails,
)
from samodcore.peer_id import PeerId


def message(session, count, data=b"\x01\x02\x03"):
    return EphemeralMessage(PeerId("alice"), EphemeralSessionId(session), count, data)


def test_generated_session_id_is_uuid_v4():
    session_id = EphemeralSessionId.generate(random.Random(1))
    parsed = uuid.UUID(str(session_id))
    assert parsed.version == 4
    assert str(parsed) == str(session_id)


def test_session_id_generation_depends_only_on_rng():
    first = EphemeralSessionId.generate(random.Random(7))
    second = EphemeralSessionId.generate(random.Random(7))
    third = EphemeralSessionId.generate(random.Random(8))
    assert first == second
    assert first != third


def test_outgoing_counter_starts_at_one_and_increments():
    session = EphemeralSession(random.Random(3))
    details = [session.next_message_session_details() for _ in range(3)]
    assert [d.counter for d in details] == [1, 2, 3]
    assert all(d.session_id == session.session_id for d in details)
    assert details[0] == OutgoingSessionDetails(1, session.session_id)


def test_first_message_from_session_is_accepted():
    session = EphemeralSession(random.Random(0))
    msg = message("s1", 5)
    assert session.receive_message(msg) == msg


def test_repeated_or_older_count_is_dropped():
    session = EphemeralSession(random.Random(0))
    session.receive_message(message("s1", 5))
    assert session.receive_message(message("s1", 5)) is None
    assert session.receive_message(message("s1", 4)) is None


def test_higher_count_is_accepted_and_raises_the_bar():
    session = EphemeralSession(random.Random(0))
    session.receive_message(message("s1", 1))
    later = message("s1", 2)
    assert session.receive_message(later) == later
    assert session.receive_message(message("s1", 2)) is None


def test_sessions_are_tracked_independently():
    session = EphemeralSession(random.Random(0))
    session.receive_message(message("s1", 10))
    other = message("s2", 1)
    assert session.receive_message(other) == other
    assert session.receive_message(message("s1", 3)) is None