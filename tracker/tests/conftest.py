"""
Centralized Test Configuration.
"""

import random

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tracker.app.db.session import Base
from tracker.app.models.parcel import Parcel  # noqa: F401
from tracker.app.schemas.parcel import ParcelCreate, utc_now_rfc3339
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(engine, expire_on_commit=False)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test function and drop after."""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session():
    with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def store(db_session):
    return ParcelStore(db_session)


@pytest.fixture
def service(store):
    return ParcelService(store)


@pytest.fixture
def client_id():
    """A fresh client identifier for each test."""
    return random.randint(1, 10_000_000)


@pytest.fixture
def make_parcel():
    """Build a ParcelCreate with sensible defaults."""
    def _make(client=1000, address="test", created_at=None, **kwargs):
        return ParcelCreate(
            client=client,
            address=address,
            created_at=created_at or utc_now_rfc3339(),
            **kwargs
        )
    return _make
