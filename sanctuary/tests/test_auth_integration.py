from __future__ import annotations

import pytest
from sqlalchemy import text

from sanctuary.app import create_app
from sanctuary.infrastructure.db import ENGINE, Base, SessionLocal, session_scope
from sanctuary.infrastructure.db.models import User
from sanctuary.shared.errors import InfrastructureError


@pytest.fixture(autouse=True)
def reset_database() -> None:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)


def test_register_login_profile_flow() -> None:
    app = create_app()
    credentials = {"email": "alice@example.com", "password": "secret123"}

    with app.test_client() as client:
        register = client.post("/api/register", json=credentials)
        assert register.status_code == 201
        registered = register.get_json()
        assert registered["access_token"]

        duplicate = client.post("/api/register", json=credentials)
        assert duplicate.status_code == 409

        wrong = client.post("/api/login", json={**credentials, "password": "nope"})
        unknown = client.post("/api/login", json={**credentials, "email": "bob@example.com"})
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.get_json() == unknown.get_json()

        login = client.post("/api/login", json=credentials)
        assert login.status_code == 200
        token = login.get_json()["access_token"]
        auth = {"Authorization": f"Bearer {token}"}

        me = client.get("/api/users/me", headers=auth)
        assert me.status_code == 200
        assert me.get_json()["id"] == registered["id"]

        updated = client.put(
            "/api/users/me",
            headers=auth,
            json={"full_name": "Alice Doe", "user_name": "alice", "dob": "1990-05-17"},
        )
        assert updated.status_code == 200
        body = updated.get_json()
        assert (body["full_name"], body["user_name"], body["dob"]) == (
            "Alice Doe",
            "alice",
            "1990-05-17",
        )

        fresh = client.get(
            "/api/users/me", headers={"Authorization": f"Bearer {body['access_token']}"}
        )
        assert fresh.status_code == 200

    session = SessionLocal()
    try:
        assert session.query(User).count() == 1
        stored = session.query(User).one()
        assert stored.password_hash != credentials["password"]
    finally:
        session.close()


def test_protected_route_rejects_missing_and_forged_tokens() -> None:
    app = create_app()

    with app.test_client() as client:
        missing = client.get("/api/users/me")
        forged = client.get("/api/users/me", headers={"Authorization": "Bearer a.b.c"})

    assert missing.status_code == forged.status_code == 401
    assert missing.get_json() == forged.get_json() == {
        "error": "unauthorized",
        "message": "You are not authorized to perform this action. Please log in again.",
    }


def test_token_for_deleted_account_returns_404() -> None:
    app = create_app()

    with app.test_client() as client:
        token = client.post(
            "/api/register", json={"email": "carol@example.com", "password": "pw"}
        ).get_json()["access_token"]

        reset = client.post("/api/reset")
        assert reset.status_code == 200
        assert reset.get_json()["deleted_users"] == 1

        me = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 404
    assert me.get_json()["error"] == "user_not_found"


def test_health_and_security_headers() -> None:
    app = create_app()

    with app.test_client() as client:
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["ok"] is True
    assert payload["database"] == "ok"
    assert payload["dialect"] == "sqlite"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-ID"] == "req-123"


def test_routing_errors_use_json_envelope() -> None:
    app = create_app()

    with app.test_client() as client:
        missing = client.get("/api/nope")
        wrong_method = client.get("/api/login")

    assert missing.status_code == 404
    assert missing.get_json()["error"] == "not_found"
    assert wrong_method.status_code == 405
    assert wrong_method.get_json()["error"] == "method_not_allowed"


def test_session_scope_maps_operational_errors() -> None:
    with pytest.raises(InfrastructureError) as exc_info:
        with session_scope() as session:
            session.execute(text("SELECT * FROM no_such_table"))

    assert exc_info.value.code == "database_unavailable"
    assert exc_info.value.status == 503
