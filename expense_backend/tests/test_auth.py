# expense_backend/tests/test_auth.py
# Tests for login, registration and credential verification

import pytest
from fastapi.testclient import TestClient

from expense_backend import auth
from expense_backend.errors import Conflict, InvalidCredentials, MissingParameter


def test_login_with_demo_credentials(client: TestClient, users):
    response = client.post("/auth/login", json={"name": "Tom", "password": "2222"})
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == users["Tom"].id
    assert data["name"] == "Tom"
    assert "password_hash" not in data


def test_login_accepts_username_alias(client: TestClient, users):
    response = client.post("/auth/login", json={"username": "Lisa", "password": "1111"})
    assert response.status_code == 200
    assert response.json()["user_id"] == users["Lisa"].id


def test_wrong_password_and_unknown_user_look_the_same(client: TestClient, users):
    wrong_password = client.post("/auth/login", json={"name": "Tom", "password": "1111"})
    unknown_user = client.post("/auth/login", json={"name": "Nobody", "password": "2222"})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}


def test_login_name_match_is_exact(client: TestClient, users):
    response = client.post("/auth/login", json={"name": "tom", "password": "2222"})
    assert response.status_code == 401


@pytest.mark.parametrize("body", [
    {"name": "Tom"},
    {"password": "2222"},
    {"name": "", "password": "2222"},
    {},
])
def test_login_missing_fields(client: TestClient, users, body):
    response = client.post("/auth/login", json=body)
    assert response.status_code == 400
    assert "error" in response.json()


def test_register_then_login(client: TestClient):
    response = client.post("/auth/register", json={"name": "Anna", "password": "secret"})
    assert response.status_code == 201
    user_id = response.json()["user_id"]

    login = client.post("/auth/login", json={"name": "Anna", "password": "secret"})
    assert login.status_code == 200
    assert login.json()["user_id"] == user_id


def test_register_existing_name_fails(client: TestClient, users):
    response = client.post("/auth/register", json={"name": "Lisa", "password": "other"})
    assert response.status_code == 409
    assert response.json() == {"error": "Name already registered"}


def test_stored_hash_is_bcrypt(users):
    password_hash = users["Lisa"].password_hash
    assert password_hash.startswith("$2")
    assert "1111" not in password_hash
    assert auth.verify_password("1111", password_hash)
    assert not auth.verify_password("2222", password_hash)


def test_authenticate_returns_user(db_session, users):
    user = auth.authenticate(db_session, "Lisa", "1111")
    assert user.id == users["Lisa"].id


def test_authenticate_errors(db_session, users):
    with pytest.raises(InvalidCredentials):
        auth.authenticate(db_session, "Lisa", "wrong")
    with pytest.raises(InvalidCredentials):
        auth.authenticate(db_session, "Ghost", "1111")
    with pytest.raises(MissingParameter):
        auth.authenticate(db_session, "Lisa", None)


def test_register_user_rejects_duplicates(db_session):
    auth.register_user(db_session, "Mia", "pw")
    with pytest.raises(Conflict):
        auth.register_user(db_session, "Mia", "pw2")
