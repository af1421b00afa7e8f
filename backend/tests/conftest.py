"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time: point the app at SQLite before importing it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base, Division, KaratMaster
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

ADMIN_ID = 1
ADMIN_EMAIL = "admin@test.com"
VIEWER_ID = 2
VIEWER_EMAIL = "viewer@test.com"


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Actors
# =============================================================================


def make_token(user_id: int, email: str, roles: list[str]) -> str:
    """Signed bearer token for a staff actor."""
    return sign_jwt({"sub": str(user_id), "email": email, "roles": roles})


@pytest.fixture
def auth_headers():
    """ADMIN bearer headers."""
    return {"Authorization": f"Bearer {make_token(ADMIN_ID, ADMIN_EMAIL, ['ADMIN'])}"}


@pytest.fixture
def viewer_auth_headers():
    """VIEWER bearer headers (read-only)."""
    return {"Authorization": f"Bearer {make_token(VIEWER_ID, VIEWER_EMAIL, ['VIEWER'])}"}


# =============================================================================
# Seed data
# =============================================================================


@pytest.fixture
def seed_division(db_session):
    """Create the default test division (D1)."""
    division = Division(code="D1", description="Gold")
    db_session.add(division)
    db_session.commit()
    db_session.refresh(division)
    return division


@pytest.fixture
def second_division(db_session):
    """Create a second division (D2)."""
    division = Division(code="D2", description="Silver")
    db_session.add(division)
    db_session.commit()
    db_session.refresh(division)
    return division


def karat_payload(division_id: int, **overrides) -> dict:
    """Valid create payload for an 18 karat record."""
    payload = {
        "code": "K18",
        "division_id": division_id,
        "description": "18 karat gold",
        "standard_purity": 75.0,
        "minimum": 74.5,
        "maximum": 75.5,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_karat(db_session):
    """
    Factory inserting karat rows directly, bypassing validation.

    Usage:
        karat = make_karat(division.id, code="K22", status="inactive")
    """
    def _make(division_id: int, **overrides) -> KaratMaster:
        fields = karat_payload(division_id, **overrides)
        fields.setdefault("status", "active")
        karat = KaratMaster(**fields)
        db_session.add(karat)
        db_session.commit()
        db_session.refresh(karat)
        return karat

    return _make


@pytest.fixture
def seed_karat(make_karat, seed_division):
    """A live, active K18 karat in D1."""
    return make_karat(seed_division.id)


@pytest.fixture(name="karat_payload")
def karat_payload_fixture():
    """The payload builder, for tests that post or create records."""
    return karat_payload
