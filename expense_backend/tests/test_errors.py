# expense_backend/tests/test_errors.py
# Error-to-response mapping

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from expense_backend import crud
from expense_backend.models import Expense
from expense_backend.main import app


def test_unknown_route(client: TestClient):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}


def test_unknown_method_is_unknown_route(client: TestClient):
    response = client.patch("/expenses/1", json={})
    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}


def test_malformed_json_body(client: TestClient):
    response = client.post(
        "/expenses",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_store_fault_hides_details(client: TestClient, users, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT secret_table", {}, Exception("disk I/O error"))

    monkeypatch.setattr(crud, "list_expenses", broken)

    response = client.get("/expenses", params={"user_id": users["Tom"].id})
    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}


def test_unexpected_error_is_500(db_session, monkeypatch):
    from expense_backend.dependencies import get_db

    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    def override_get_db():
        yield db_session

    monkeypatch.setattr(crud, "list_expenses", explode)
    app.dependency_overrides[get_db] = override_get_db
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/expenses", params={"user_id": 1})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_failed_commit_is_reported_and_nothing_saved(client: TestClient, db_session, users, monkeypatch):
    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    response = client.post(
        "/expenses",
        json={"user_id": users["Tom"].id, "description": "lost", "amount": 5},
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}

    monkeypatch.undo()
    assert db_session.query(Expense).count() == 0
