import random
import uuid

from samodcore.storage_id import StorageId, StorageIdError


def test_generate_is_uuid4_string():
    storage_id = StorageId.generate(random.Random(9))
    parsed = uuid.UUID(str(storage_id))
    assert parsed.version == 4
    assert str(parsed) == str(storage_id)


def test_generated_is_not_nil():
    assert StorageId.generate(random.Random(0)) != StorageId.from_uuid(uuid.UUID(int=0))


def test_nil_uuid_form():
    assert str(StorageId.from_uuid(uuid.UUID(int=0))) == "00000000-0000-0000-0000-000000000000"


def test_different_rngs_give_different_ids():
    assert StorageId.generate(random.Random(1)) != StorageId.generate(random.Random(2))


def test_equality_and_hash_by_value():
    assert {StorageId("abc"): 1}[StorageId("abc")] == 1


def test_error_message():
    error = StorageIdError()
    assert isinstance(error, Exception)
    assert str(error) == "Invalid storage ID format"