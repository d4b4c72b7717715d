# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, time-bounded bearer tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from course_archive.domain.credentials.entities import IssuedToken
from course_archive.domain.credentials.repositories import TokenService
from course_archive.shared.errors.base import ServerMisconfiguredError, UnauthorizedError
from course_archive.shared.logging import logger

_JWT_ALG = "HS256"


def utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """HS256 tokens carrying ``sub``, ``iat`` and ``exp``.

    Expiry is checked against the injected clock rather than PyJWT's own, so a
    token is rejected from the expiry instant onwards.
    """

    def __init__(
        self,
        *,
        secret: str | None,
        ttl: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, subject: int) -> IssuedToken:
        if not self._secret:
            logger.error("tokens.issue: JWT_SECRET is not configured")
            raise ServerMisconfiguredError("JWT_SECRET")

        now = int(self._clock().timestamp())
        exp = now + max(1, int(self._ttl.total_seconds()))
        payload = {"sub": str(subject), "iat": now, "exp": exp}
        token = jwt.encode(payload, self._secret, algorithm=_JWT_ALG)
        return IssuedToken(
            subject=subject,
            token=token,
            issued_at=datetime.fromtimestamp(now, UTC),
            expires_at=datetime.fromtimestamp(exp, UTC),
        )

    def verify(self, token: str) -> int:
        if not self._secret or not token:
            raise UnauthorizedError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_JWT_ALG],
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.debug(f"tokens.verify: rejected ({type(exc).__name__})")
            raise UnauthorizedError() from None

        exp = payload.get("exp")
        if not isinstance(exp, int | float) or self._clock().timestamp() >= exp:
            logger.debug("tokens.verify: rejected (expired)")
            raise UnauthorizedError()

        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            logger.debug("tokens.verify: rejected (bad subject)")
            raise UnauthorizedError() from None


__all__ = ["JwtTokenService", "utcnow"]
