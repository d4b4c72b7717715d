# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from course_archive.shared.errors.base import DomainError


class UnprovisionedError(DomainError):
    code = "unprovisioned"
    status = HTTPStatus.UNAUTHORIZED
    message = "User not found. Please run database seed."


class InvalidCredentialError(DomainError):
    code = "invalid_credential"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid password"


class ForbiddenError(DomainError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN
    message = "Invalid authorization key"


class CredentialNotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    message = "User not found"
