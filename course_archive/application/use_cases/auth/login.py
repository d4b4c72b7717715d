# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from course_archive.domain.credentials.entities import IssuedToken
from course_archive.domain.credentials.exceptions import (
    InvalidCredentialError,
    UnprovisionedError,
)
from course_archive.domain.credentials.repositories import (
    CredentialRepository,
    PasswordHasher,
    TokenService,
)
from course_archive.shared.logging import logger


class LoginUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._credentials = credentials
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, password: str) -> IssuedToken:
        credential = self._credentials.get_single()
        if credential is None:
            logger.warning("auth.login: no credential provisioned")
            raise UnprovisionedError()

        if not self._password_hasher.verify(password, credential.secret_hash):
            raise InvalidCredentialError()

        return self._tokens.issue(credential.id)
