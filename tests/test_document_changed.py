import dataclasses

import pytest

from samodcore.document_changed import DocumentChanged


def test_heads_are_kept_in_order_as_tuple():
    heads = [b"\x01" * 32, b"\x02" * 32]
    changed = DocumentChanged(heads)
    assert changed.new_heads == (b"\x01" * 32, b"\x02" * 32)


def test_equal_heads_compare_equal_and_hash_alike():
    first = DocumentChanged([b"a", b"b"])
    second = DocumentChanged((b"a", b"b"))
    assert first == second
    assert len({first, second}) == 1


def test_different_order_is_different_event():
    assert DocumentChanged([b"a", b"b"]) != DocumentChanged([b"b", b"a"])


def test_event_is_immutable():
    changed = DocumentChanged([b"a"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        changed.new_heads = ()
    assert changed.new_heads == (b"a",)