"""
Document storage abstraction.

Every repository talks to a ``DocumentStore``: named collections of documents
(plain dicts with camelCase keys) addressed by a single string key. Three
backends implement it: ``MemoryStore`` here, ``SqlStore`` (SQLAlchemy) and
``FirestoreStore``.
"""

from __future__ import annotations

import copy
import threading
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from app.core.config import settings

Document = Dict[str, Any]

GUESTS = "guests"
CHECKINS = "checkins"
RSVPS = "rsvps"
EVENT_SETTINGS = "eventSettings"

# Field holding the document key in each collection
KEY_FIELDS = {
    GUESTS: "id",
    CHECKINS: "id",
    RSVPS: "guestId",
    EVENT_SETTINGS: "id",
}


class DocumentStore(ABC):
    """Storage interface shared by all backends"""

    @abstractmethod
    def find_one(self, collection: str, key: str) -> Optional[Document]:
        """Return the document stored under ``key`` or None"""

    @abstractmethod
    def upsert(self, collection: str, key: str, fields: Document) -> Document:
        """Merge ``fields`` over the stored document, creating it if absent"""

    @abstractmethod
    def update(self, collection: str, key: str, fields: Document) -> Optional[Document]:
        """Merge ``fields`` over an existing document; None if it does not exist"""

    @abstractmethod
    def insert_unique(self, collection: str, key: str, document: Document) -> Tuple[Document, bool]:
        """Insert ``document`` unless one already exists under ``key``.

        Must be atomic: of any number of concurrent callers for the same key
        exactly one gets ``created=True``. The others get the stored document
        and ``created=False``.
        """

    @abstractmethod
    def count(self, collection: str) -> int:
        ...

    @abstractmethod
    def list_all(self, collection: str) -> List[Document]:
        ...

    def list_sorted(self, collection: str, field: str, descending: bool = True) -> List[Document]:
        docs = self.list_all(collection)
        return sorted(docs, key=lambda d: d.get(field) or 0, reverse=descending)


class MemoryStore(DocumentStore):
    """Process-local store, used for tests and quick local runs"""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Document]] = {}
        self._lock = threading.Lock()

    def _bucket(self, collection: str) -> Dict[str, Document]:
        return self._collections.setdefault(collection, {})

    def find_one(self, collection: str, key: str) -> Optional[Document]:
        doc = self._bucket(collection).get(key)
        return copy.deepcopy(doc) if doc is not None else None

    def upsert(self, collection: str, key: str, fields: Document) -> Document:
        with self._lock:
            bucket = self._bucket(collection)
            doc = bucket.get(key, {KEY_FIELDS.get(collection, "id"): key})
            doc = {**doc, **fields}
            bucket[key] = doc
            return copy.deepcopy(doc)

    def update(self, collection: str, key: str, fields: Document) -> Optional[Document]:
        with self._lock:
            bucket = self._bucket(collection)
            if key not in bucket:
                return None
            bucket[key] = {**bucket[key], **fields}
            return copy.deepcopy(bucket[key])

    def insert_unique(self, collection: str, key: str, document: Document) -> Tuple[Document, bool]:
        with self._lock:
            bucket = self._bucket(collection)
            if key in bucket:
                return copy.deepcopy(bucket[key]), False
            bucket[key] = copy.deepcopy(document)
            return copy.deepcopy(document), True

    def count(self, collection: str) -> int:
        return len(self._bucket(collection))

    def list_all(self, collection: str) -> List[Document]:
        return [copy.deepcopy(d) for d in list(self._bucket(collection).values())]


@lru_cache(maxsize=1)
def get_store() -> DocumentStore:
    """Build the configured store once per process.

    Firestore when USE_FIREBASE is set, otherwise SQLAlchemy on DATABASE_URL.
    """
    if settings.USE_FIREBASE:
        from app.services.firestore_store import FirestoreStore
        from app.services.firebase_client import get_firestore_client
        return FirestoreStore(get_firestore_client())

    from app.core.db import SessionLocal
    from app.services.sql_store import SqlStore
    store = SqlStore(SessionLocal)
    store.create_tables()
    return store
