# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Credential, IssuedToken


class CredentialRepository(Protocol):
    def get_single(self) -> Credential | None: ...
    def find_by_id(self, credential_id: int) -> Credential | None: ...
    def replace_hash(self, credential_id: int, *, expected_hash: str, new_hash: str) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, subject: int) -> IssuedToken: ...
    def verify(self, token: str) -> int: ...
