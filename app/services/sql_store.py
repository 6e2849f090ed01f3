"""
SQLAlchemy implementation of the document store.

Each collection maps onto its own table (see ``app.models``). The document key
is the table's primary key, so ``insert_unique`` is enforced by the database:
a losing concurrent insert fails with ``IntegrityError`` and the stored row is
read back instead.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Type

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.db import Base
from app.core.errors import StorageError
from app.models import Checkin, EventSettings, Guest, Rsvp
from app.services.storage import (
    CHECKINS,
    EVENT_SETTINGS,
    GUESTS,
    RSVPS,
    KEY_FIELDS,
    Document,
    DocumentStore,
)

logger = logging.getLogger(__name__)

MODELS: Dict[str, Type[Base]] = {
    GUESTS: Guest,
    CHECKINS: Checkin,
    RSVPS: Rsvp,
    EVENT_SETTINGS: EventSettings,
}


class SqlStore(DocumentStore):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def create_tables(self) -> None:
        engine = self.session_factory.kw["bind"]
        Base.metadata.create_all(bind=engine)

    @staticmethod
    def _model(collection: str):
        try:
            return MODELS[collection]
        except KeyError:
            raise StorageError(f"Unknown collection '{collection}'")

    def find_one(self, collection: str, key: str) -> Optional[Document]:
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                row = db.get(model, key)
                return row.to_document() if row else None
        except SQLAlchemyError as e:
            logger.exception(f"find_one failed on {collection}/{key}")
            raise StorageError() from e

    def _merge(self, db: Session, collection: str, key: str, fields: Document, create: bool) -> Optional[Document]:
        model = self._model(collection)
        row = db.get(model, key)
        if row is None:
            if not create:
                return None
            row = model()
            row.apply_document({KEY_FIELDS[collection]: key})
            db.add(row)
        row.apply_document({k: v for k, v in fields.items() if k != KEY_FIELDS[collection]})
        db.flush()
        doc = row.to_document()
        db.commit()
        return doc

    def upsert(self, collection: str, key: str, fields: Document) -> Document:
        try:
            try:
                with self.session_factory() as db:
                    return self._merge(db, collection, key, fields, create=True)
            except IntegrityError:
                # Another writer created the row between our read and insert; merge over it
                with self.session_factory() as db:
                    return self._merge(db, collection, key, fields, create=True)
        except SQLAlchemyError as e:
            logger.exception(f"upsert failed on {collection}/{key}")
            raise StorageError() from e

    def update(self, collection: str, key: str, fields: Document) -> Optional[Document]:
        try:
            with self.session_factory() as db:
                return self._merge(db, collection, key, fields, create=False)
        except SQLAlchemyError as e:
            logger.exception(f"update failed on {collection}/{key}")
            raise StorageError() from e

    def insert_unique(self, collection: str, key: str, document: Document) -> Tuple[Document, bool]:
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                row = model()
                row.apply_document({**document, KEY_FIELDS[collection]: key})
                db.add(row)
                try:
                    db.commit()
                except IntegrityError:
                    db.rollback()
                    existing = db.get(model, key)
                    if existing is None:
                        raise
                    return existing.to_document(), False
                return {**document, KEY_FIELDS[collection]: key}, True
        except SQLAlchemyError as e:
            logger.exception(f"insert_unique failed on {collection}/{key}")
            raise StorageError() from e

    def count(self, collection: str) -> int:
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                return db.scalar(select(func.count()).select_from(model)) or 0
        except SQLAlchemyError as e:
            logger.exception(f"count failed on {collection}")
            raise StorageError() from e

    def list_all(self, collection: str) -> List[Document]:
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                return [row.to_document() for row in db.scalars(select(model)).all()]
        except SQLAlchemyError as e:
            logger.exception(f"list_all failed on {collection}")
            raise StorageError() from e

    def list_sorted(self, collection: str, field: str, descending: bool = True) -> List[Document]:
        model = self._model(collection)
        attr = model.__document_fields__.get(field)
        if attr is None:
            return super().list_sorted(collection, field, descending)
        column = getattr(model, attr)
        try:
            with self.session_factory() as db:
                stmt = select(model).order_by(desc(column) if descending else column)
                return [row.to_document() for row in db.scalars(stmt).all()]
        except SQLAlchemyError as e:
            logger.exception(f"list_sorted failed on {collection}")
            raise StorageError() from e
