from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from sanctuary.application.services.tokens import issue_token
from sanctuary.application.use_cases.users.login_user import LoginUserUseCase
from sanctuary.application.use_cases.users.profile import GetProfileUseCase, UpdateProfileUseCase
from sanctuary.application.use_cases.users.register_user import RegisterUserUseCase
from sanctuary.application.use_cases.users.reset_users import ResetUsersUseCase
from sanctuary.auth import TOKEN_SECRET_CONFIG_KEY
from sanctuary.domain.users.entities import ProfileUpdate, User
from sanctuary.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from sanctuary.interfaces.http.controllers.auth_controller import AuthController
from sanctuary.interfaces.http.controllers.misc_controller import MiscController
from sanctuary.interfaces.http.controllers.users_controller import UsersController
from sanctuary.shared.middleware.error_handler import configure_error_handling

SECRET = "controller-secret"


def _user(user_id: int = 1, email: str = "alice@example.com") -> User:
    now = datetime(2025, 1, 1, tzinfo=UTC)
    return User(id=user_id, email=email, password_hash="hash", created_at=now, updated_at=now)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    app.config[TOKEN_SECRET_CONFIG_KEY] = SECRET
    configure_error_handling(app)
    return app


def test_register_endpoint_returns_user_and_token(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str]] = {}

    class StubRegister:
        def execute(self, email: str, password: str) -> tuple[User, str]:
            register_called["args"] = (email, password)
            return _user(email=email), "token123"

    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, StubRegister()),
        login_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"email": " Alice@Example.com ", "password": "secret123"}
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice@example.com", "secret123")
    payload = response.get_json()
    assert payload["access_token"] == "token123"
    assert payload["email"] == "alice@example.com"
    assert payload["dob"] == ""
    assert "password_hash" not in payload


def test_register_duplicate_returns_409(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = UserAlreadyExistsError()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/register", json={"email": "a@b.io", "password": "pw"})

    assert response.status_code == 409
    assert response.get_json()["error"] == "user_already_exists"


def test_login_invalid_payload_returns_422(flask_app: Flask) -> None:
    controller = AuthController(register_use_case=MagicMock(), login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "not-an-email"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["email", "password"]


def test_login_bad_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(
        register_use_case=MagicMock(), login_use_case=cast(LoginUserUseCase, login)
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "a@b.io", "password": "pw"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"


def _users_app(flask_app: Flask, get_profile: object, update_profile: object) -> Flask:
    controller = UsersController(
        get_profile_use_case=cast(GetProfileUseCase, get_profile),
        update_profile_use_case=cast(UpdateProfileUseCase, update_profile),
    )
    flask_app.register_blueprint(controller.as_blueprint())
    return flask_app


def test_me_requires_bearer_token(flask_app: Flask) -> None:
    get_profile = MagicMock()
    app = _users_app(flask_app, get_profile, MagicMock())

    with app.test_client() as client:
        response = client.get("/api/users/me")

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"
    get_profile.execute.assert_not_called()


def test_me_returns_profile_of_token_subject(flask_app: Flask) -> None:
    get_profile = MagicMock()
    get_profile.execute.return_value = _user(user_id=7)
    app = _users_app(flask_app, get_profile, MagicMock())
    token = issue_token(7, SECRET, timedelta(hours=1))

    with app.test_client() as client:
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json()["id"] == 7
    get_profile.execute.assert_called_once_with(7)


def test_update_me_passes_profile_update(flask_app: Flask) -> None:
    update_profile = MagicMock()
    update_profile.execute.return_value = (_user(user_id=7), "fresh-token")
    app = _users_app(flask_app, MagicMock(), update_profile)
    token = issue_token(7, SECRET, timedelta(hours=1))

    with app.test_client() as client:
        response = client.put(
            "/api/users/me",
            headers={"Authorization": f"Bearer {token}"},
            json={"full_name": " Alice A ", "user_name": "alice", "dob": "1991-02-03"},
        )

    assert response.status_code == 200
    assert response.get_json()["access_token"] == "fresh-token"
    update_profile.execute.assert_called_once_with(
        7, ProfileUpdate(full_name="Alice A", user_name="alice", dob=date(1991, 2, 3))
    )


def test_update_me_rejects_bad_date(flask_app: Flask) -> None:
    app = _users_app(flask_app, MagicMock(), MagicMock())
    token = issue_token(7, SECRET, timedelta(hours=1))

    with app.test_client() as client:
        response = client.put(
            "/api/users/me",
            headers={"Authorization": f"Bearer {token}"},
            json={"full_name": "A", "user_name": "a", "dob": "17/05/1990"},
        )

    assert response.status_code == 422
    assert response.get_json()["context"]["fields"] == ["dob"]


def test_reset_outside_dev_platform_returns_405(flask_app: Flask) -> None:
    controller = MiscController(reset_use_case=ResetUsersUseCase(users=MagicMock(), dev_platform=False))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/reset")

    assert response.status_code == 405
    assert response.get_json()["error"] == "reset_not_allowed"
