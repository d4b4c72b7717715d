# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from course_archive.shared.errors.validation_types import ValidationErrorType


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
        from_attributes=True,
    )


def require_not_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError(
            ValidationErrorType.BLANK,
            "Value cannot be blank",
            {},
        )
    return value
