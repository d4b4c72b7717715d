# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from course_archive.domain.credentials.entities import (
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
    Credential,
)
from course_archive.domain.credentials.repositories import PasswordHasher
from course_archive.infrastructure.repositories.credential_repository import (
    SqlAlchemyCredentialRepository,
)
from course_archive.shared.logging import logger


class AdminSetupError(Exception):
    pass


class AdminSetup:
    """Provisioning of the single administrative credential."""

    def __init__(
        self,
        *,
        credentials: SqlAlchemyCredentialRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._credentials = credentials
        self._password_hasher = password_hasher

    def seed(self, password: str, *, force: bool = False) -> Credential:
        if len(password) < MIN_PASSWORD_LENGTH or not password.strip():
            raise AdminSetupError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(password) > MAX_PASSWORD_LENGTH:
            raise AdminSetupError(
                f"Password must be at most {MAX_PASSWORD_LENGTH} characters"
            )

        existing = self._credentials.get_single()
        if existing is None:
            credential = self._credentials.add(self._password_hasher.hash(password))
            logger.info(f"admin_setup: provisioned credential id={credential.id}")
            return credential

        if not force:
            raise AdminSetupError(
                "A credential is already provisioned; pass --force to overwrite it"
            )

        new_hash = self._password_hasher.hash(password)
        if not self._credentials.replace_hash(
            existing.id, expected_hash=existing.secret_hash, new_hash=new_hash
        ):
            raise AdminSetupError("Credential changed during re-seed, try again")
        logger.info(f"admin_setup: re-seeded credential id={existing.id}")
        return Credential(id=existing.id, secret_hash=new_hash)

    def warn_if_unprovisioned(self) -> bool:
        count = self._credentials.count()
        if count == 0:
            logger.warning(
                "admin_setup: no credential provisioned, logins will fail until "
                "`python -m course_archive.scripts.seed_admin` is run"
            )
            return False
        if count > 1:
            logger.error(
                f"admin_setup: {count} credentials found, only the first one is used"
            )
        return True


__all__ = [
    "AdminSetup",
    "AdminSetupError",
    "MAX_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
]
