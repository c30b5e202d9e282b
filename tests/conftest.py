from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobboard.models  # noqa: F401
from jobboard.core.rate_limiter import rate_limiter
from jobboard.database import Base, get_db
from jobboard.dependencies import get_current_user_optional
from jobboard.main import app
from jobboard.models.listing import Listing


@dataclass
class StubUser:
    id: str = "user-1"
    name: str = "Jane Doe"
    email: str = "user@example.com"


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _install_db(session_factory):
    def _db_override():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _db_override


@pytest.fixture
def client(session_factory, stub_user: StubUser):
    _install_db(session_factory)
    app.dependency_overrides[get_current_user_optional] = lambda: stub_user
    rate_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def guest_client(session_factory):
    _install_db(session_factory)
    app.dependency_overrides[get_current_user_optional] = lambda: None
    rate_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def session_client(session_factory):
    """Client that resolves the user from the real session cookie."""
    _install_db(session_factory)
    rate_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_listing(session_factory):
    """Insert a listing directly and return its id."""
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(**overrides) -> int:
        counter["n"] += 1
        values = {
            "user_id": "user-1",
            "title": "Backend Dev",
            "description": "Build APIs",
            "salary": "90000",
            "email": "a@b.com",
            "city": "Austin",
            "state": "TX",
            "created_at": base_time + timedelta(minutes=counter["n"]),
        }
        values.update(overrides)
        with session_factory() as s:
            listing = Listing(**values)
            s.add(listing)
            s.commit()
            return listing.id

    return _make
