"""
Tests for the Firestore store against an in-process fake client
"""

import pytest
from google.api_core.exceptions import AlreadyExists, NotFound, ServiceUnavailable

from app.core.errors import StorageError
from app.services.firestore_store import FirestoreStore
from app.services.storage import CHECKINS, GUESTS, RSVPS

class FakeSnapshot:
    def __init__(self, data):
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None

class FakeDocument:
    def __init__(self, docs, key):
        self.docs = docs
        self.key = key

    def get(self):
        return FakeSnapshot(self.docs.get(self.key))

    def set(self, data, merge=False):
        current = self.docs.get(self.key, {}) if merge else {}
        self.docs[self.key] = {**current, **data}

    def create(self, data):
        if self.key in self.docs:
            raise AlreadyExists(f"{self.key} exists")
        self.docs[self.key] = dict(data)

    def update(self, fields):
        if self.key not in self.docs:
            raise NotFound(f"{self.key} missing")
        self.docs[self.key].update(fields)

class FakeAggregate:
    def __init__(self, value):
        self.value = value

class FakeCount:
    def __init__(self, value):
        self.value = value

    def get(self):
        return [[FakeAggregate(self.value)]]

class FakeQuery:
    def __init__(self, snapshots):
        self.snapshots = snapshots

    def stream(self):
        return iter(self.snapshots)

class FakeCollection:
    def __init__(self, docs):
        self.docs = docs

    def document(self, key):
        return FakeDocument(self.docs, key)

    def stream(self):
        return iter(FakeSnapshot(d) for d in self.docs.values())

    def count(self):
        return FakeCount(len(self.docs))

    def get(self):
        return list(self.stream())

    def order_by(self, field, direction=None):
        ordered = sorted(self.docs.values(), key=lambda d: d[field], reverse=direction == "DESCENDING")
        return FakeQuery([FakeSnapshot(d) for d in ordered])

class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return FakeCollection(self.collections.setdefault(name, {}))

class BrokenFirestore:
    def collection(self, name):
        raise ServiceUnavailable("firestore down")

@pytest.fixture
def firestore_store():
    return FirestoreStore(FakeFirestore())

def test_upsert_and_find(firestore_store):
    firestore_store.upsert(GUESTS, "G1", {"name": "A", "company": "Acme"})
    doc = firestore_store.upsert(GUESTS, "G1", {"name": "Alice"})

    assert doc == {"id": "G1", "name": "Alice", "company": "Acme"}
    assert firestore_store.find_one(GUESTS, "G1")["company"] == "Acme"
    assert firestore_store.find_one(GUESTS, "G2") is None

def test_rsvp_key_field(firestore_store):
    assert firestore_store.upsert(RSVPS, "G1", {"status": "confirmed"})["guestId"] == "G1"

def test_update_missing_document(firestore_store):
    assert firestore_store.update(GUESTS, "G1", {"name": "A"}) is None

def test_insert_unique(firestore_store):
    doc, created = firestore_store.insert_unique(CHECKINS, "G1", {"name": "A", "timestamp": 1})
    assert created
    assert doc["id"] == "G1"

    doc, created = firestore_store.insert_unique(CHECKINS, "G1", {"name": "B", "timestamp": 2})
    assert not created
    assert doc["timestamp"] == 1

def test_list_sorted(firestore_store):
    for key, ts in [("a", 1), ("b", 3), ("c", 2)]:
        firestore_store.insert_unique(CHECKINS, key, {"timestamp": ts})

    assert [d["id"] for d in firestore_store.list_sorted(CHECKINS, "timestamp")] == ["b", "c", "a"]
    assert len(firestore_store.list_all(CHECKINS)) == 3
    assert firestore_store.count(CHECKINS) == 3

def test_backend_errors_become_storage_errors():
    store = FirestoreStore(BrokenFirestore())

    with pytest.raises(StorageError):
        store.list_all(GUESTS)
