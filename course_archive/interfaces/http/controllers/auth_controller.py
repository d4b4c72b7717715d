# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from course_archive.application.use_cases.auth.change_password import ChangePasswordUseCase
from course_archive.application.use_cases.auth.login import LoginUseCase
from course_archive.application.use_cases.auth.verify_token import VerifyTokenUseCase
from course_archive.infrastructure.auth_middleware import require_auth
from course_archive.interfaces.http.dto.auth import (
    ChangePasswordRequestDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    MessageDTO,
    UserDTO,
    VerifyResponseDTO,
)
from course_archive.shared.errors.validation import raise_validation_error
from course_archive.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUseCase,
        change_password_use_case: ChangePasswordUseCase,
        verify_token_use_case: VerifyTokenUseCase,
    ) -> None:
        self._login_use_case = login_use_case
        self._change_password_use_case = change_password_use_case
        self._verify_token_use_case = verify_token_use_case

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        issued = self._login_use_case.execute(dto.password)

        payload = LoginResponseDTO(token=issued.token, user=UserDTO(id=issued.subject))
        logger.info(
            f"auth.login: ok user_id={issued.subject} expires_at={issued.expires_at.isoformat()}"
        )
        return jsonify(payload.model_dump(mode="json")), 200

    def change_password(self) -> tuple[Response, int]:
        try:
            dto = ChangePasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        self._change_password_use_case.execute(
            subject=g.user_id,
            old_password=dto.old_password,
            new_password=dto.new_password,
            rotation_key=dto.key,
        )

        payload = MessageDTO(message="Password changed successfully")
        return jsonify(payload.model_dump(mode="json")), 200

    def verify(self) -> tuple[Response, int]:
        payload = VerifyResponseDTO(user=UserDTO(id=g.user_id))
        return jsonify(payload.model_dump(mode="json")), 200

    def as_blueprint(self) -> Blueprint:
        authenticated = require_auth(self._verify_token_use_case)
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/change-password",
            view_func=authenticated(self.change_password),
            methods=["POST"],
        )
        bp.add_url_rule("/verify", view_func=authenticated(self.verify), methods=["GET"])
        return bp
