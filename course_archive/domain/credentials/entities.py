# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# Bounds for any secret that gets stored. Login and old-password checks only
# verify an existing hash and take any non-empty input.
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 1024


@dataclass(slots=True, frozen=True)
class Credential:
    """The single administrative credential. Only the hash is ever held."""

    id: int
    secret_hash: str


@dataclass(slots=True, frozen=True)
class IssuedToken:

    subject: int
    token: str
    issued_at: datetime
    expires_at: datetime
