from datetime import timedelta

from jose import jwt

from app.core.config import settings
from app.core.security import create_access_token


def test_register_then_login_returns_token_for_same_user(client):
    registered = client.post("/api/auth/register", json={"username": "alice", "password": "password1"})
    assert registered.status_code == 201
    assert registered.json()["user"]["username"] == "alice"

    response = client.post("/api/auth/login", json={"username": "alice", "password": "password1"})
    assert response.status_code == 200
    body = response.json()
    payload = jwt.decode(body["token"], settings.secret_key, algorithms=[settings.jwt_algorithm])
    assert payload["username"] == "alice"
    assert payload["sub"] == str(body["user"]["id"])


def test_login_ignores_username_case(client, alice):
    response = client.post("/api/auth/login", json={"username": "ALICE", "password": "password1"})
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "alice"


def test_register_duplicate_username_in_any_case_conflicts(client, alice):
    response = client.post("/api/auth/register", json={"username": "Alice", "password": "secret99"})
    assert response.status_code == 409
    assert response.json()["error"] == "Username already taken"


def test_register_rejects_short_username_and_password(client):
    short_name = client.post("/api/auth/register", json={"username": "al", "password": "password1"})
    short_pass = client.post("/api/auth/register", json={"username": "alice", "password": "12345"})
    assert short_name.status_code == 400
    assert short_pass.status_code == 400
    assert "error" in short_name.json()


def test_register_missing_field_is_bad_request(client):
    response = client.post("/api/auth/register", json={"username": "alice"})
    assert response.status_code == 400
    assert response.json()["type"] == "ValidationError"


def test_login_failures_share_one_message(client, alice):
    wrong_password = client.post("/api/auth/login", json={"username": "alice", "password": "nope-nope"})
    unknown_user = client.post("/api/auth/login", json={"username": "nobody", "password": "password1"})
    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json()["error"] == unknown_user.json()["error"] == "Invalid credentials"


def test_me_returns_identity(client, alice):
    response = client.get("/api/auth/me", headers=alice)
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


def test_protected_route_requires_token(client):
    response = client.post("/api/topics", json={"title": "X"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_malformed_token_is_rejected(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_expired_token_is_rejected(client):
    token = create_access_token(1, "alice", expires_delta=timedelta(seconds=-1))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_signed_with_other_key_is_rejected(client):
    token = jwt.encode({"sub": "1", "username": "alice"}, "other-key", algorithm="HS256")
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_non_ascii_usernames_match_in_any_case(client):
    registered = client.post("/api/auth/register", json={"username": "Иван", "password": "password1"})
    assert registered.status_code == 201

    exact = client.post("/api/auth/login", json={"username": "Иван", "password": "password1"})
    folded = client.post("/api/auth/login", json={"username": "иван", "password": "password1"})
    assert exact.status_code == 200
    assert folded.status_code == 200
    assert folded.json()["user"]["username"] == "Иван"

    duplicate = client.post("/api/auth/register", json={"username": "иван", "password": "password1"})
    assert duplicate.status_code == 409
