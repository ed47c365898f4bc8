# tests/test_api_users.py
from fastapi.testclient import TestClient

from fitcoach.auth import TokenManager, tokens
from fitcoach.config import JWT_SECRET
from fitcoach.models import User


def _register(client: TestClient, username: str = "ana", password: str = "s3cret"):
    return client.post("/users/register", json={"username": username, "password": password})


def test_register_then_login_gives_user_role_token(client: TestClient):
    r = _register(client)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "User registered successfully."
    assert tokens.verify(body["token"])["role"] == "user"

    r = client.post("/users/login", json={"username": "ana", "password": "s3cret"})
    assert r.status_code == 200
    claims = tokens.decode(r.json()["token"])
    assert claims["username"] == "ana"
    assert claims["role"] == "user"


def test_register_stores_hash_not_plaintext(client: TestClient, db_session):
    _register(client, "ben", "plaintext-pw")
    user = db_session.query(User).filter(User.username == "ben").one()
    assert user.password_hash != "plaintext-pw"


def test_register_duplicate_username_is_400(client: TestClient):
    assert _register(client).status_code == 201
    r = _register(client, password="different")
    assert r.status_code == 400
    assert r.json()["detail"] == "Username already exists."


def test_register_missing_fields_is_400(client: TestClient):
    r = client.post("/users/register", json={"username": "ana"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Validation failed"

    r = client.post("/users/register", json={"username": "", "password": "x"})
    assert r.status_code == 400


def test_login_failures_share_one_message(client: TestClient):
    _register(client)
    wrong_pw = client.post("/users/login", json={"username": "ana", "password": "nope"})
    unknown = client.post("/users/login", json={"username": "nobody", "password": "nope"})
    assert wrong_pw.status_code == unknown.status_code == 400
    assert wrong_pw.json() == unknown.json() == {"detail": "Invalid username or password."}


def test_renew_token(client: TestClient):
    token = _register(client).json()["token"]
    r = client.post("/users/renew", json={"token": token})
    assert r.status_code == 200
    assert r.json()["message"] == "Token renewed successfully."
    assert tokens.verify(r.json()["token"])["username"] == "ana"


def test_renew_missing_token_is_400(client: TestClient):
    r = client.post("/users/renew", json={})
    assert r.status_code == 400


def test_renew_invalid_or_expired_token_is_401(client: TestClient):
    r = client.post("/users/renew", json={"token": "garbage"})
    assert r.status_code == 401

    expired = TokenManager(JWT_SECRET, expire_sec=-10).issue({"id": 1, "username": "ana", "role": "user"})
    r = client.post("/users/renew", json={"token": expired})
    assert r.status_code == 401


def test_registered_token_works_on_protected_routes(client: TestClient):
    body = _register(client).json()
    user_id = tokens.verify(body["token"])["id"]
    headers = {"Authorization": f"Bearer {body['token']}"}

    r = client.post("/plans", json={"title": "My plan", "length": 14}, headers=headers)
    assert r.status_code == 201
    assert r.json()["user_id"] == user_id


def test_login_with_padded_username_matches_registration(client: TestClient):
    creds = {"username": " ana ", "password": "pw"}
    assert client.post("/users/register", json=creds).status_code == 201

    r = client.post("/users/login", json=creds)
    assert r.status_code == 200
    assert tokens.decode(r.json()["token"])["username"] == "ana"
    assert client.post("/users/login", json={"username": "ana", "password": "pw"}).status_code == 200
