# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Blueprint, g, request

from course_archive.application.use_cases.auth.verify_token import VerifyTokenUseCase
from course_archive.shared.errors.base import UnauthorizedError
from course_archive.shared.logging import logger


def extract_bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "").strip()
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authenticate_request(verify_token: VerifyTokenUseCase) -> int:
    """Verify the bearer token and bind its subject to ``g.user_id``.

    Every failure surfaces as the same ``UnauthorizedError``.
    """
    try:
        subject = verify_token.execute(extract_bearer_token())
    except UnauthorizedError:
        logger.warning(f"Auth failed on {request.method} {request.path}")
        raise
    g.user_id = subject
    logger.debug(f"Auth OK: user={subject} {request.method} {request.path}")
    return subject


def require_auth(verify_token: VerifyTokenUseCase) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            authenticate_request(verify_token)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def protect_blueprint(bp: Blueprint, verify_token: VerifyTokenUseCase) -> Blueprint:
    @bp.before_request
    def _authenticate() -> None:
        if request.method == "OPTIONS":
            return
        authenticate_request(verify_token)

    return bp


__all__ = [
    "authenticate_request",
    "extract_bearer_token",
    "protect_blueprint",
    "require_auth",
]
