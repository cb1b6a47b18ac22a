"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- In-memory storage backend (no disk or S3 access)
"""

import os

# Must be set before the app's settings are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["JSON_LOGS"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.database import Base, get_db
from jobboard.core.storage import MemoryStorage, StorageError, get_storage
import jobboard.models  # noqa: F401  (registers tables on Base)
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FailingStorage(MemoryStorage):
    """Storage backend whose uploads are always rejected"""

    name = "failing"

    def store(self, data, category, filename=None, content_type=None):
        raise StorageError("media host rejected the upload")


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(db_session, storage):
    """
    FastAPI test client with overridden database and storage dependencies.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def failing_storage_client(client):
    """Same client, but every upload fails at the storage backend"""
    failing = FailingStorage()
    app.dependency_overrides[get_storage] = lambda: failing
    return client


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "Engineer",
        "description": "Build things",
        "location": "Remote"
    }


@pytest.fixture
def sample_application_data():
    """Form fields for an application (job id filled in by the test)"""
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "portfolio": "https://ada.example.com"
    }
