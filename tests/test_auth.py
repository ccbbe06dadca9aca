import inspect
from datetime import timedelta
from unittest.mock import patch
from uuid import uuid4

from jose import jwt

from app.config import SECRET_KEY
from app.routers.auth import ALGORITHM, create_access_token, get_current_user, get_password_hash, verify_password

from .conftest import API


def test_register_returns_user_id(client):
    response = client.post(f"{API}/auth/register", json={"username": "dana", "password": "pw12345"})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered"
    assert body["userId"]


def test_register_requires_username_and_password(client):
    response = client.post(f"{API}/auth/register", json={"username": "dana"})
    assert response.status_code == 400
    assert response.json() == {"error": "Username and password required"}

    response = client.post(f"{API}/auth/register", json={"username": "   ", "password": "pw"})
    assert response.status_code == 400


def test_register_rejects_taken_username(client):
    client.post(f"{API}/auth/register", json={"username": "dana", "password": "pw12345"})
    response = client.post(f"{API}/auth/register", json={"username": "dana", "password": "other"})
    assert response.status_code == 400
    assert response.json() == {"error": "Username already taken"}


def test_login_issues_token_for_user(client):
    registered = client.post(f"{API}/auth/register", json={"username": "dana", "password": "pw12345"}).json()
    response = client.post(f"{API}/auth/login", json={"username": "dana", "password": "pw12345"})
    assert response.status_code == 200
    payload = jwt.decode(response.json()["token"], SECRET_KEY, algorithms=[ALGORITHM])
    assert payload["sub"] == registered["userId"]
    assert "exp" in payload


def test_login_rejects_bad_credentials(client):
    client.post(f"{API}/auth/register", json={"username": "dana", "password": "pw12345"})

    wrong_password = client.post(f"{API}/auth/login", json={"username": "dana", "password": "nope"})
    unknown_user = client.post(f"{API}/auth/login", json={"username": "erin", "password": "pw12345"})
    missing = client.post(f"{API}/auth/login", json={})

    assert wrong_password.status_code == 400
    assert unknown_user.status_code == 400
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid username or password"}
    assert missing.status_code == 400


def test_password_is_stored_hashed():
    hashed = get_password_hash("pw12345")
    assert hashed != "pw12345"
    assert verify_password("pw12345", hashed)
    assert not verify_password("pw1234", hashed)


def test_protected_endpoint_requires_token(client):
    response = client.get(f"{API}/task")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_protected_endpoint_rejects_garbage_token(client):
    response = client.get(f"{API}/task", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401
    assert response.json() == {"error": "Could not validate credentials"}


def test_protected_endpoint_rejects_expired_token(client):
    registered = client.post(f"{API}/auth/register", json={"username": "dana", "password": "pw12345"}).json()
    token = create_access_token({"sub": registered["userId"]}, expires_delta=timedelta(minutes=-5))
    response = client.get(f"{API}/task", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_protected_endpoint_rejects_token_signed_with_other_key(client):
    registered = client.post(f"{API}/auth/register", json={"username": "dana", "password": "pw12345"}).json()
    token = jwt.encode({"sub": registered["userId"]}, "some-other-key", algorithm=ALGORITHM)
    response = client.get(f"{API}/task", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    token = create_access_token({"sub": str(uuid4())})
    response = client.get(f"{API}/task", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json() == {"error": "User not found"}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_register_race_on_same_username(client):
    client.post(f"{API}/auth/register", json={"username": "dana", "password": "pw12345"})

    # Both requests passed the lookup before either committed
    with patch("app.routers.auth._find_user", return_value=None):
        response = client.post(f"{API}/auth/register", json={"username": "dana", "password": "other"})

    assert response.status_code == 400
    assert response.json() == {"error": "Username already taken"}


def test_current_user_dependency_runs_in_threadpool():
    assert not inspect.iscoroutinefunction(get_current_user)
