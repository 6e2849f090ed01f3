"""
Firestore implementation of the document store.

Documents live at ``{collection}/{key}``. ``insert_unique`` uses
``DocumentReference.create``, which Firestore rejects with ``AlreadyExists``
when the document is already there.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists, GoogleAPICallError, NotFound

from app.core.errors import StorageError
from app.services.storage import KEY_FIELDS, Document, DocumentStore

logger = logging.getLogger(__name__)


class FirestoreStore(DocumentStore):
    def __init__(self, client: Any):
        self.client = client

    def _ref(self, collection: str, key: str):
        return self.client.collection(collection).document(key)

    def find_one(self, collection: str, key: str) -> Optional[Document]:
        try:
            doc = self._ref(collection, key).get()
        except GoogleAPICallError as e:
            logger.exception(f"find_one failed on {collection}/{key}")
            raise StorageError() from e
        return doc.to_dict() if doc.exists else None

    def upsert(self, collection: str, key: str, fields: Document) -> Document:
        ref = self._ref(collection, key)
        try:
            ref.set({**fields, KEY_FIELDS.get(collection, "id"): key}, merge=True)
            return ref.get().to_dict()
        except GoogleAPICallError as e:
            logger.exception(f"upsert failed on {collection}/{key}")
            raise StorageError() from e

    def update(self, collection: str, key: str, fields: Document) -> Optional[Document]:
        ref = self._ref(collection, key)
        try:
            ref.update(fields)
        except NotFound:
            return None
        except GoogleAPICallError as e:
            logger.exception(f"update failed on {collection}/{key}")
            raise StorageError() from e
        return self.find_one(collection, key)

    def insert_unique(self, collection: str, key: str, document: Document) -> Tuple[Document, bool]:
        ref = self._ref(collection, key)
        document = {**document, KEY_FIELDS.get(collection, "id"): key}
        try:
            ref.create(document)
            return document, True
        except AlreadyExists:
            existing = self.find_one(collection, key)
            if existing is None:
                raise StorageError(f"{collection}/{key} reported as existing but could not be read")
            return existing, False
        except GoogleAPICallError as e:
            logger.exception(f"insert_unique failed on {collection}/{key}")
            raise StorageError() from e

    def count(self, collection: str) -> int:
        try:
            results = self.client.collection(collection).count().get()
        except GoogleAPICallError as e:
            logger.exception(f"count failed on {collection}")
            raise StorageError() from e
        return int(results[0][0].value) if results else 0

    def list_all(self, collection: str) -> List[Document]:
        try:
            return [d.to_dict() for d in self.client.collection(collection).stream()]
        except GoogleAPICallError as e:
            logger.exception(f"list_all failed on {collection}")
            raise StorageError() from e

    def list_sorted(self, collection: str, field: str, descending: bool = True) -> List[Document]:
        direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
        try:
            docs = self.client.collection(collection).order_by(field, direction=direction).stream()
            return [d.to_dict() for d in docs]
        except GoogleAPICallError as e:
            logger.exception(f"list_sorted failed on {collection}")
            raise StorageError() from e
