import uuid

import pytest

from services.identity_service import allocate_public_id, normalize_public_id


def test_public_id_is_a_version_4_uuid():
    public_id = allocate_public_id()
    parsed = uuid.UUID(public_id)
    assert parsed.version == 4
    assert str(parsed) == public_id


def test_public_id_is_built_from_the_random_source():
    public_id = allocate_public_id(random_bytes=lambda n: bytes(range(n)))
    assert public_id == "00010203-0405-4607-8809-0a0b0c0d0e0f"


def test_public_ids_do_not_repeat():
    ids = {allocate_public_id() for _ in range(1000)}
    assert len(ids) == 1000


def test_normalize_accepts_uppercase_and_whitespace():
    public_id = allocate_public_id()
    assert normalize_public_id(f"  {public_id.upper()} ") == public_id


@pytest.mark.parametrize("value", [None, "", "not-a-uuid", "12345", "../../etc/passwd"])
def test_normalize_rejects_malformed_ids(value):
    assert normalize_public_id(value) is None
