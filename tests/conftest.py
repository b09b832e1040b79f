"""
Pytest configuration: in-memory SQLite database and a TestClient wired to it.
"""
import os

# Must be set before resto_backend.database is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("CORS_ORIGINS", "*")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from resto_backend.core.security import get_password_hash
from resto_backend.database import Base, create_db_engine, get_db
from resto_backend.main import app
from resto_backend.models.auth import User

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def engine():
    """Fresh in-memory database per test; StaticPool shares the one connection."""
    test_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Session for arranging data and checking results outside the API."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """Create test client with isolated dependency overrides."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()


class ApiUser:
    """A registered user plus the headers to act as them."""

    def __init__(self, data, token):
        self.data = data
        self.id = data["id"]
        self.email = data["email"]
        self.token = token
        self.headers = {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Factory: register through the API and log in."""
    counter = {"n": 0}

    def _register(name=None, email=None, password=DEFAULT_PASSWORD):
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        email = email or f"user{counter['n']}@example.com"

        response = client.post(
            "/api/users/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text

        login = client.post("/api/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return ApiUser(response.json(), login.json()["access_token"])

    return _register


@pytest.fixture
def make_db_user(db_session):
    """Factory: insert a user row directly (for rule tests without HTTP)."""
    counter = {"n": 0}

    def _make(name=None, email=None):
        counter["n"] += 1
        user = User(
            name=name or f"Db User {counter['n']}",
            email=email or f"dbuser{counter['n']}@example.com",
            password=get_password_hash(DEFAULT_PASSWORD),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make
