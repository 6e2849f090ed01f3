"""
SQLAlchemy engine, session factory and declarative base
"""

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import settings


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine, allowing SQLite connections to be shared across threads"""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


class DocumentMixin:
    """Maps a row to and from the camelCase document shape used by the stores.

    Subclasses declare ``__document_fields__`` as ``{document_key: attribute}``.
    """

    __document_fields__: Dict[str, str] = {}

    def to_document(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for key, attr in self.__document_fields__.items()}

    def apply_document(self, fields: Dict[str, Any]) -> None:
        for key, value in fields.items():
            attr = self.__document_fields__.get(key)
            if attr is not None:
                setattr(self, attr, value)

