"""
Tests for authentication endpoints.
"""
import base64
import json
from types import SimpleNamespace
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from bricksy.api.dependencies import get_auth_service, get_user_repository
from bricksy.core.config import settings
from bricksy.core.security import issue_token, verify_token
from bricksy.main import app


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_register(registered_user):
    """Register normalizes the email and returns a token."""
    assert registered_user["success"] is True
    assert registered_user["token"]
    user = registered_user["user"]
    assert user["email"] == "ana@test.com"
    assert user["nombre"] == "Ana"
    assert user["apellidos"] == ""
    assert user["telefono"] is None
    assert "password_hash" not in user


def test_register_then_login(client, registered_user):
    response = client.post(
        "/api/login",
        json={"email": "ana@test.com", "password": "secret123"}
    )
    assert response.status_code == 200
    body = response.json()
    identity = verify_token(body["token"])
    assert identity.id == registered_user["user"]["id"]
    assert identity.email == "ana@test.com"
    assert "password_hash" not in body["user"]


def test_login_with_mixed_case_email(client, registered_user):
    response = client.post(
        "/api/login",
        json={"email": "  ANA@test.COM ", "password": "secret123"}
    )
    assert response.status_code == 200


def test_login_wrong_password(client, registered_user):
    response = client.post(
        "/api/login",
        json={"email": "ana@test.com", "password": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "InvalidPassword"


def test_login_unknown_user(client):
    response = client.post(
        "/api/login",
        json={"email": "nobody@test.com", "password": "secret123"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "UserNotFound"


def test_login_missing_fields(client):
    response = client.post("/api/login", json={"email": "ana@test.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidCredentials"


def test_register_duplicate_email_case_variant(client, registered_user):
    response = client.post(
        "/api/register",
        json={"email": "ana@test.com", "password": "another123"}
    )
    assert response.status_code == 409
    assert response.json()["error"] == "DuplicateEmail"


def test_register_missing_fields(client):
    response = client.post("/api/register", json={"email": "ana@test.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "MissingFields"


def test_register_password_too_short(client):
    response = client.post(
        "/api/register",
        json={"email": "ana@test.com", "password": "12345"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "PasswordTooShort"
    assert body["context"] == {"min_length": 6}


def test_register_invalid_email(client):
    response = client.post(
        "/api/register",
        json={"email": "not-an-email", "password": "secret123"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidEmail"


def test_register_malformed_body(client):
    response = client.post("/api/register", json=["ana@test.com", "secret123"])
    assert response.status_code == 400
    assert response.json()["error"] == "MissingFields"


def test_register_accepts_client_aliases(client):
    response = client.post(
        "/api/register",
        json={
            "name": "Luis",
            "surname": "García",
            "residence": "Madrid",
            "nacimiento": "1990-05-01",
            "phone": "600000000",
            "email": "luis@test.com",
            "password": "secret123",
        }
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["nombre"] == "Luis"
    assert user["apellidos"] == "García"
    assert user["residencia"] == "Madrid"
    assert user["fecha_nacimiento"] == "1990-05-01"
    assert user["telefono"] == "600000000"


def test_me(client, registered_user):
    response = client.get("/api/me", headers=auth_header(registered_user["token"]))
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["id"] == registered_user["user"]["id"]
    assert "password_hash" not in user


def test_me_without_token(client):
    response = client.get("/api/me")
    assert response.status_code == 401
    assert response.json()["error"] == "NoToken"


def test_me_with_wrong_scheme(client, registered_user):
    response = client.get(
        "/api/me", headers={"Authorization": f"Token {registered_user['token']}"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "NoToken"


def test_me_with_invalid_token(client):
    response = client.get("/api/me", headers=auth_header("not.a.token"))
    assert response.status_code == 401
    assert response.json()["error"] == "InvalidToken"


def test_me_with_tampered_payload(client, registered_user):
    header, payload, signature = registered_user["token"].split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    claims["id"] = claims["id"] + 1
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()

    response = client.get("/api/me", headers=auth_header(f"{header}.{forged}.{signature}"))
    assert response.status_code == 401
    assert response.json()["error"] == "InvalidToken"


def test_me_for_deleted_user(client):
    ghost = SimpleNamespace(id=999, email="ghost@test.com", nombre="")
    response = client.get("/api/me", headers=auth_header(issue_token(ghost)))
    assert response.status_code == 404
    assert response.json()["error"] == "UserNotFound"


def test_logout(client, registered_user):
    response = client.post("/api/logout", headers=auth_header(registered_user["token"]))
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_logout_without_token(client):
    response = client.post("/api/logout")
    assert response.status_code == 401
    assert response.json()["error"] == "NoToken"


class UnavailableRepository:
    def find_by_email(self, email):
        raise OperationalError("SELECT id FROM users", {}, Exception("disk I/O error"))


def test_register_store_unavailable(client):
    app.dependency_overrides[get_user_repository] = lambda: UnavailableRepository()
    response = client.post(
        "/api/register",
        json={"email": "ana@test.com", "password": "secret123"}
    )
    assert response.status_code == 500
    assert response.json()["error"] == "InternalError"
    assert "disk I/O" not in response.text


def test_in_memory_store_shared_across_requests(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setattr(settings, "JWT_SECRET", "test-secret")
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)

    with TestClient(app) as client:
        registered = client.post(
            "/api/register",
            json={"email": "ana@test.com", "password": "secret123"}
        )
        assert registered.status_code == 200

        logged_in = client.post(
            "/api/login",
            json={"email": "ana@test.com", "password": "secret123"}
        )
        assert logged_in.status_code == 200

        me = client.get("/api/me", headers=auth_header(logged_in.json()["token"]))
        assert me.status_code == 200
        assert me.json()["user"]["email"] == "ana@test.com"


def test_root_path_not_served(client):
    assert client.get("/").status_code == 404


def test_unexpected_error_hides_details(db_url):
    def broken_service():
        raise RuntimeError("connection string postgres://admin:hunter2@db")

    app.dependency_overrides[get_auth_service] = broken_service
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post(
                "/api/login",
                json={"email": "ana@test.com", "password": "secret123"}
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["error"] == "InternalError"
    assert "hunter2" not in response.text
