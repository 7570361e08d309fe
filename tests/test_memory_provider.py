from enum import Enum
import pytest
from aptkey_core.errors import ResourceError, ValidationError
from aptkey_core.keyring import InMemoryKeyring, KeyRecord

FP = "126C0D24BD8A2942CC7DF8AC7638D0442B90D010"
NEW = "D21169141CECD440F2EB8DDA9D6D8F6BC857C906"


@pytest.fixture
def keyring():
    return InMemoryKeyring(records=[KeyRecord(fingerprint=FP, size=4096, type="rsa")])


def test_canonicalize_against_memory_keyring(keyring, context):
    assert keyring.canonicalize(context, [{"name": "0x2b90d010"}])[0]["id"] == FP


def test_reconcile_roundtrip(keyring, context):
    keyring.set(context, {
        NEW: {"is": None, "should": {"ensure": "present"}},
        FP: {"should": {"ensure": "absent"}},
    })
    assert [r["fingerprint"] for r in keyring.get(context)] == [NEW]

    keyring.set(context, {NEW: {"should": {"ensure": "present"}}})
    assert len(keyring.get(context)) == 1


def test_noop_changes_nothing(keyring, context):
    keyring.set(context, {FP: {"should": None}, NEW: {"should": {"ensure": "present"}}}, noop=True)
    assert [r["fingerprint"] for r in keyring.get(context)] == [FP]


def test_create_validates(keyring, context):
    with pytest.raises(ValidationError):
        keyring.create(context, NEW, {"server": "not a server"})
    with pytest.raises(ResourceError, match="mutually exclusive"):
        keyring.create(context, NEW, {"content": "k", "source": "/k"})


class Ensure(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class Symbol:
    def __init__(self, name):
        self.name = name

    def __str__(self):
        return self.name


@pytest.mark.parametrize("present,absent", [
    (Ensure.PRESENT, Ensure.ABSENT),
    (Symbol("present"), Symbol("absent")),
])
def test_set_accepts_enum_like_ensure(keyring, context, present, absent):
    keyring.set(context, {
        NEW: {"is": {"ensure": absent}, "should": {"ensure": present}},
        FP: {"is": {"ensure": present}, "should": {"ensure": absent}},
    })
    assert [r["fingerprint"] for r in keyring.get(context)] == [NEW]


def test_create_empty_content_and_source_are_exclusive(keyring, context):
    with pytest.raises(ResourceError, match="mutually exclusive"):
        keyring.create(context, NEW, {"content": "", "source": "/k"})
    assert NEW not in keyring.keys
