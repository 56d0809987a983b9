"""
Shared fixtures: every test gets its own SQLite file.
"""
import pytest
from fastapi.testclient import TestClient
from bricksy.core.config import settings
from bricksy.db.session import SessionLocal, close_db, init_db
from bricksy.main import app


@pytest.fixture()
def db_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'bricksy-test.sqlite3'}"
    monkeypatch.setattr(settings, "DATABASE_URL", url)
    monkeypatch.setattr(settings, "JWT_SECRET", "test-secret")
    # Minimum bcrypt cost keeps the suite fast
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    return url


@pytest.fixture()
def client(db_url):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session(db_url):
    init_db(db_url)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        close_db()


@pytest.fixture()
def registered_user(client):
    """Register Ana and return the response body."""
    response = client.post(
        "/api/register",
        json={"nombre": "Ana", "email": "Ana@Test.com", "password": "secret123"},
    )
    assert response.status_code == 200
    return response.json()
