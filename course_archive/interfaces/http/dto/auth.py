# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from course_archive.domain.credentials.entities import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH
from course_archive.shared.errors.validation_types import ValidationErrorType

from .base import CamelModel, require_not_blank


class LoginRequestDTO(CamelModel):
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return require_not_blank(value)


class ChangePasswordRequestDTO(CamelModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1, max_length=MAX_PASSWORD_LENGTH)
    key: str = Field(min_length=1)

    @field_validator("old_password", "key")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        return require_not_blank(value)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        require_not_blank(value)
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_TOO_SHORT,
                "New password must be at least 6 characters",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return value


class UserDTO(CamelModel):
    id: int


class LoginResponseDTO(CamelModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    user: UserDTO


class VerifyResponseDTO(CamelModel):
    success: bool = True
    message: str = "Token is valid"
    user: UserDTO


class MessageDTO(CamelModel):
    success: bool = True
    message: str
