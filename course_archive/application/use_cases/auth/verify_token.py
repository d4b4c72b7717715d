# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from course_archive.domain.credentials.repositories import TokenService
from course_archive.shared.errors.base import UnauthorizedError


class VerifyTokenUseCase:
    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> int:
        if not token:
            raise UnauthorizedError()
        return self._tokens.verify(token)
