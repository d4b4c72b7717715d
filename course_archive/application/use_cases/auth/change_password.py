# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from course_archive.domain.credentials.exceptions import (
    CredentialNotFoundError,
    ForbiddenError,
    InvalidCredentialError,
)
from course_archive.domain.credentials.repositories import (
    CredentialRepository,
    PasswordHasher,
)
from course_archive.shared.logging import logger

OLD_PASSWORD_INCORRECT = "Old password is incorrect"


class ChangePasswordUseCase:
    """Rotate the credential behind two gates: the rotation key, then the old password.

    Tokens issued before the rotation are left untouched and expire naturally.
    """

    def __init__(
        self,
        *,
        credentials: CredentialRepository,
        password_hasher: PasswordHasher,
        rotation_key: str | None,
    ) -> None:
        self._credentials = credentials
        self._password_hasher = password_hasher
        self._rotation_key = rotation_key

    def _rotation_key_matches(self, supplied: str) -> bool:
        if not self._rotation_key:
            return False
        return secrets.compare_digest(
            supplied.encode("utf-8"), self._rotation_key.encode("utf-8")
        )

    def execute(
        self,
        *,
        subject: int,
        old_password: str,
        new_password: str,
        rotation_key: str,
    ) -> None:
        if not self._rotation_key_matches(rotation_key):
            logger.warning(f"auth.change_password: rotation key rejected for subject={subject}")
            raise ForbiddenError()

        credential = self._credentials.find_by_id(subject)
        if credential is None:
            raise CredentialNotFoundError()

        if not self._password_hasher.verify(old_password, credential.secret_hash):
            raise InvalidCredentialError(message=OLD_PASSWORD_INCORRECT)

        new_hash = self._password_hasher.hash(new_password)
        replaced = self._credentials.replace_hash(
            credential.id, expected_hash=credential.secret_hash, new_hash=new_hash
        )
        if not replaced:
            # Hash changed between read and write.
            logger.warning(f"auth.change_password: concurrent rotation for subject={subject}")
            raise InvalidCredentialError(message=OLD_PASSWORD_INCORRECT)

        logger.info(f"auth.change_password: ok subject={subject}")
