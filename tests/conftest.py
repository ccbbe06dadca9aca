import os

# Must be set before app.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlmodel import Session, SQLModel

from app.database import _create_engine, get_db
from app.main import app
from app.models import User

API = "/api/v1"


@pytest.fixture
def engine():
    """A fresh in-memory database per test."""
    engine = _create_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=Session)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client):
    """Register ``username`` and return bearer headers for it."""
    def _login_as(username, password="s3cret-pass"):
        client.post(f"{API}/auth/register", json={"username": username, "password": password})
        response = client.post(f"{API}/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login_as


@pytest.fixture
def alice(login_as):
    return login_as("alice")


@pytest.fixture
def bob(login_as):
    return login_as("bob")


@pytest.fixture
def user(db):
    """A user row for tests that call the services directly."""
    account = User(username="carol", hashed_password="not-a-real-hash")
    db.add(account)
    db.commit()
    db.refresh(account)
    return account
