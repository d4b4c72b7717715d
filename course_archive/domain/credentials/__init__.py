# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, Credential, IssuedToken
from .exceptions import (
    CredentialNotFoundError,
    ForbiddenError,
    InvalidCredentialError,
    UnprovisionedError,
)
from .repositories import CredentialRepository, PasswordHasher, TokenService

__all__ = [
    "MAX_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "Credential",
    "CredentialNotFoundError",
    "CredentialRepository",
    "ForbiddenError",
    "InvalidCredentialError",
    "IssuedToken",
    "PasswordHasher",
    "TokenService",
    "UnprovisionedError",
]
