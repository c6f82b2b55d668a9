import random

import pytest

from samodcore.automerge_url import AutomergeUrl, InvalidUrlError
from samodcore.document_id import DocumentId


@pytest.fixture
def doc_id():
    return DocumentId.generate(random.Random(42))


def test_from_document_id_formats(doc_id):
    url = AutomergeUrl.from_document_id(doc_id)
    assert str(url) == f"automerge:{doc_id}"
    assert url.path is None


def test_parse_without_path(doc_id):
    url = AutomergeUrl.parse(f"automerge:{doc_id}")
    assert url.document_id == doc_id
    assert url.path is None


def test_parse_with_path(doc_id):
    url = AutomergeUrl.parse(f"automerge:{doc_id}/foo/3/bar")
    assert url.path == ("foo", 3, "bar")
    assert str(url) == f"automerge:{doc_id}/foo/3/bar"


def test_negative_number_stays_key(doc_id):
    url = AutomergeUrl.parse(f"automerge:{doc_id}/-1")
    assert url.path == ("-1",)


def test_repr(doc_id):
    assert repr(AutomergeUrl.from_document_id(doc_id)) == f"AutomergeUrl(automerge:{doc_id})"


def test_missing_prefix():
    with pytest.raises(InvalidUrlError) as info:
        AutomergeUrl.parse("xyz")
    assert str(info.value) == "Invalid Automerge URL: invalid automerge url: xyz"


def test_bad_document_id():
    with pytest.raises(InvalidUrlError) as info:
        AutomergeUrl.parse("automerge:nonsense")
    assert "invalid automerge url: automerge:nonsense" in str(info.value)


def test_round_trip_through_string(doc_id):
    url = AutomergeUrl(doc_id, ["a", 0])
    assert AutomergeUrl.parse(str(url)) == url