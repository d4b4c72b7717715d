from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from course_archive.application.use_cases.auth.login import LoginUseCase
from course_archive.application.use_cases.auth.verify_token import VerifyTokenUseCase
from course_archive.domain.credentials.entities import IssuedToken
from course_archive.domain.credentials.exceptions import (
    CredentialNotFoundError,
    ForbiddenError,
    InvalidCredentialError,
    UnprovisionedError,
)
from course_archive.interfaces.http.controllers.auth_controller import AuthController
from course_archive.shared.errors.base import ServerMisconfiguredError, UnauthorizedError
from course_archive.shared.middleware.error_handler import configure_error_handling


class StubVerify:
    def execute(self, token: str | None) -> int:
        if token != "good-token":
            raise UnauthorizedError()
        return 1


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _register(flask_app: Flask, **overrides) -> dict[str, MagicMock]:
    parts = {
        "login_use_case": MagicMock(),
        "change_password_use_case": MagicMock(),
        "verify_token_use_case": cast(VerifyTokenUseCase, StubVerify()),
    }
    parts.update(overrides)
    flask_app.register_blueprint(AuthController(**parts).as_blueprint())
    return parts


def test_login_returns_token_and_user(flask_app: Flask) -> None:
    login_called: dict[str, str] = {}

    class StubLogin:
        def execute(self, password: str) -> IssuedToken:
            login_called["password"] = password
            now = datetime.now(UTC)
            return IssuedToken(subject=1, token="jwt-token", issued_at=now, expires_at=now + timedelta(days=1))

    _register(flask_app, login_use_case=cast(LoginUseCase, StubLogin()))

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"password": "s3cret"})

    assert response.status_code == 200
    assert login_called["password"] == "s3cret"
    assert response.get_json() == {
        "success": True,
        "message": "Login successful",
        "token": "jwt-token",
        "user": {"id": 1},
    }


@pytest.mark.parametrize("body", [{}, {"password": ""}, {"password": "   "}, {"password": 5}])
def test_login_invalid_payload_returns_400_without_touching_store(flask_app: Flask, body) -> None:
    parts = _register(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json=body)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"] == "validation_error"
    assert payload["errors"]
    parts["login_use_case"].execute.assert_not_called()


def test_login_with_non_json_body_returns_400(flask_app: Flask) -> None:
    _register(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", data="password=s3cret")

    assert response.status_code == 400


def test_login_unprovisioned_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = UnprovisionedError()
    _register(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"password": "s3cret"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "User not found. Please run database seed."


def test_login_without_signing_secret_returns_500(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = ServerMisconfiguredError("JWT_SECRET")
    _register(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"password": "s3cret"})

    assert response.status_code == 500
    assert response.get_json()["error"] == "server_misconfigured"


def test_verify_requires_bearer_token(flask_app: Flask) -> None:
    _register(flask_app)

    with flask_app.test_client() as client:
        missing = client.get("/api/auth/verify")
        wrong_scheme = client.get("/api/auth/verify", headers={"Authorization": "Basic good-token"})
        bad = client.get("/api/auth/verify", headers={"Authorization": "Bearer nope"})

    for response in (missing, wrong_scheme, bad):
        assert response.status_code == 401
        assert response.get_json()["error"] == "unauthorized"
        assert response.headers["WWW-Authenticate"] == "Bearer"


def test_verify_returns_subject(flask_app: Flask) -> None:
    _register(flask_app)

    with flask_app.test_client() as client:
        response = client.get("/api/auth/verify", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "Token is valid", "user": {"id": 1}}


def test_change_password_passes_subject_from_token(flask_app: Flask) -> None:
    parts = _register(flask_app)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/change-password",
            json={"oldPassword": "s3cret", "newPassword": "n3wpass", "key": "ROT-KEY"},
            headers={"Authorization": "Bearer good-token"},
        )

    assert response.status_code == 200
    assert response.get_json()["message"] == "Password changed successfully"
    parts["change_password_use_case"].execute.assert_called_once_with(
        subject=1, old_password="s3cret", new_password="n3wpass", rotation_key="ROT-KEY"
    )


def test_change_password_checks_token_before_body(flask_app: Flask) -> None:
    parts = _register(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/change-password", json={})

    assert response.status_code == 401
    parts["change_password_use_case"].execute.assert_not_called()


def test_change_password_short_new_password_returns_400(flask_app: Flask) -> None:
    parts = _register(flask_app)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/change-password",
            json={"oldPassword": "s3cret", "newPassword": "12345", "key": "ROT-KEY"},
            headers={"Authorization": "Bearer good-token"},
        )

    assert response.status_code == 400
    errors = response.get_json()["errors"]
    assert errors[0]["type"] == "password_too_short"
    assert errors[0]["message"] == "New password must be at least 6 characters"
    parts["change_password_use_case"].execute.assert_not_called()


@pytest.mark.parametrize(
    ("error", "status"),
    [(ForbiddenError(), 403), (CredentialNotFoundError(), 404)],
)
def test_change_password_maps_domain_errors(flask_app: Flask, error, status) -> None:
    change = MagicMock()
    change.execute.side_effect = error
    _register(flask_app, change_password_use_case=change)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/change-password",
            json={"oldPassword": "s3cret", "newPassword": "n3wpass", "key": "x"},
            headers={"Authorization": "Bearer good-token"},
        )

    assert response.status_code == status
    assert response.get_json()["success"] is False


def test_change_password_wrong_old_password_returns_401(flask_app: Flask) -> None:
    change = MagicMock()
    change.execute.side_effect = InvalidCredentialError(message="Old password is incorrect")
    _register(flask_app, change_password_use_case=change)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/change-password",
            json={"oldPassword": "wrong!", "newPassword": "n3wpass", "key": "ROT-KEY"},
            headers={"Authorization": "Bearer good-token"},
        )

    assert response.status_code == 401
    payload = response.get_json()
    assert payload["error"] == "invalid_credential"
    assert payload["message"] == "Old password is incorrect"


@pytest.mark.parametrize(
    "body",
    [
        {"oldPassword": "   ", "newPassword": "n3wpass", "key": "ROT-KEY"},
        {"oldPassword": "", "newPassword": "n3wpass", "key": "ROT-KEY"},
        {"oldPassword": "s3cret", "newPassword": "n3wpass", "key": "  "},
        {"oldPassword": "s3cret", "newPassword": "n3wpass"},
    ],
)
def test_change_password_blank_fields_return_400(flask_app: Flask, body) -> None:
    parts = _register(flask_app)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/change-password",
            json=body,
            headers={"Authorization": "Bearer good-token"},
        )

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"
    parts["change_password_use_case"].execute.assert_not_called()


def test_login_accepts_long_password(flask_app: Flask) -> None:
    login = MagicMock()
    now = datetime.now(UTC)
    login.execute.return_value = IssuedToken(subject=1, token="t", issued_at=now, expires_at=now)
    _register(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"password": "p" * 500})

    assert response.status_code == 200
    login.execute.assert_called_once_with("p" * 500)
