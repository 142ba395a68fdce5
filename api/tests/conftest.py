import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from app.core.database import build_engine, get_session
from app.main import app
from app.models import models  # noqa: F401
from app.schemas.auth import Identity


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return its auth headers."""
    def _register(username: str, password: str = "password1") -> dict:
        response = client.post("/api/auth/register", json={"username": username, "password": password})
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _register


@pytest.fixture
def alice(register):
    return register("alice")


@pytest.fixture
def bob(register):
    return register("bob")


@pytest.fixture
def topic(client, alice):
    response = client.post("/api/topics", json={"title": "Testing", "color": "#123456"}, headers=alice)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def identity():
    return Identity(user_id=1, username="alice")
