from __future__ import annotations

from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from tokenauth.application.use_cases.users.register_user import RegisterUserUseCase
from tokenauth.domain.users.entities import LoginResult, PublicUser, RegisteredUser
from tokenauth.domain.users.exceptions import (
    InvalidCredentialsError,
    MissingTokenError,
)
from tokenauth.interfaces.http.controllers.auth_controller import AuthController
from tokenauth.shared.middleware.error_handler import configure_error_handling

ALICE = PublicUser(id=7, email="a@x.io", username="alice")


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _controller(**overrides: object) -> AuthController:
    use_cases: dict[str, object] = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "verify_use_case": MagicMock(),
    }
    use_cases.update(overrides)
    return AuthController(**use_cases, metrics_enabled=False)  # type: ignore[arg-type]


def test_register_endpoint_returns_created(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str, str]] = {}

    class StubRegister:
        def execute(self, email: str, username: str, password: str) -> RegisteredUser:
            register_called["args"] = (email, username, password)
            return RegisteredUser(user_id=7)

    controller = _controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register",
            json={"email": "a@x.io", "username": "alice", "password": "secret1"},
        )

    assert response.status_code == 201
    assert register_called["args"] == ("a@x.io", "alice", "secret1")
    assert response.get_json() == {"message": "User registered successfully", "userId": 7}


def test_register_non_string_field_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"email": 123, "username": "alice", "password": "secret1"}
        )

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"
    register.execute.assert_not_called()


def test_login_accepts_email_key_and_forwards_client_address(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = LoginResult(token="tok-1", user=ALICE)
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/login",
            json={"email": "a@x.io", "password": "secret1"},
            headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1"},
        )

    assert response.status_code == 200
    login.execute.assert_called_once_with("a@x.io", "secret1", "203.0.113.5")
    assert response.get_json() == {
        "message": "Login successful",
        "token": "tok-1",
        "user": {"id": 7, "email": "a@x.io", "username": "alice"},
    }


def test_login_falls_back_to_next_non_empty_identifier(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = LoginResult(token="tok-1", user=ALICE)
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/login",
            json={"username": "", "email": "a@x.io", "password": "secret1"},
        )

    assert response.status_code == 200
    login.execute.assert_called_once_with("a@x.io", "secret1", "127.0.0.1")


def test_login_prefers_username_over_email_key(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = LoginResult(token="tok-1", user=ALICE)
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        client.post(
            "/api/login",
            json={"username": "alice", "email": "a@x.io", "password": "secret1"},
        )

    assert login.execute.call_args.args[0] == "alice"


def test_login_invalid_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"username": "alice", "password": "bad"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"


@pytest.mark.parametrize("header", ["tok-1", "Bearer tok-1", "bearer  tok-1"])
def test_logout_reads_raw_or_bearer_token(flask_app: Flask, header: str) -> None:
    logout = MagicMock()
    flask_app.register_blueprint(_controller(logout_use_case=logout).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/logout", headers={"Authorization": header})

    assert response.status_code == 200
    logout.execute.assert_called_once_with("tok-1")
    assert response.get_json() == {"message": "Logged out successfully"}


def test_me_without_token_returns_401(flask_app: Flask) -> None:
    verify = MagicMock()
    verify.execute.side_effect = MissingTokenError()
    flask_app.register_blueprint(_controller(verify_use_case=verify).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/me")

    assert response.status_code == 401
    assert response.get_json()["error"] == "missing_token"
    verify.execute.assert_called_once_with(None)


def test_me_returns_verified_identity(flask_app: Flask) -> None:
    verify = MagicMock()
    verify.execute.return_value = ALICE
    flask_app.register_blueprint(_controller(verify_use_case=verify).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/me", headers={"Authorization": "Bearer tok-1"})

    assert response.status_code == 200
    assert response.get_json() == {"user": {"id": 7, "email": "a@x.io", "username": "alice"}}
