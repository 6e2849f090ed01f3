"""
Shared fixtures: stores, seeded guests and an API client bound to an in-memory store
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import Base
from app.schemas.guest import Guest
from app.services.repositories import CheckinRepo, EventSettingsRepo, GuestRepo, RsvpRepo
from app.services.sql_store import SqlStore
from app.services.storage import MemoryStore, get_store

@pytest.fixture
def memory_store():
    return MemoryStore()

@pytest.fixture
def sql_store():
    """SQLAlchemy store on a private in-memory SQLite database"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    store = SqlStore(TestingSessionLocal)
    store.create_tables()
    try:
        yield store
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()

@pytest.fixture
def file_sql_store(tmp_path):
    """SQLAlchemy store on a SQLite file, so each thread gets its own connection"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'checkin.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    store = SqlStore(TestingSessionLocal)
    store.create_tables()
    try:
        yield store
    finally:
        engine.dispose()

@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Runs a test once per store backend"""
    return request.getfixturevalue(f"{request.param}_store")

def seed(store, checkin_enabled=True):
    """Load the standard guests and set the check-in gate"""
    guests = GuestRepo(store)
    guests.save(Guest(id="G1", salutation="Mr.", name="A", position="Eng", company="Acme"))
    guests.save(Guest(id="G2", salutation="", name="B", position="", company="X"))
    guests.save(Guest(id="G3", salutation="Ms.", name="Carol", position="CTO", company="Beta"))
    EventSettingsRepo(store).update({"checkinEnabled": checkin_enabled})
    return guests

@pytest.fixture
def repos(memory_store):
    return {
        "guests": GuestRepo(memory_store),
        "rsvps": RsvpRepo(memory_store),
        "settings": EventSettingsRepo(memory_store),
        "checkins": CheckinRepo(memory_store),
    }

@pytest.fixture
def client(memory_store):
    from main import app
    from app.api.dependencies import enforce_rate_limit

    app.dependency_overrides[get_store] = lambda: memory_store
    app.dependency_overrides[enforce_rate_limit] = lambda: None
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def seed_guests():
    return seed
