# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from course_archive.domain.courses.entities import CourseField
from course_archive.domain.courses.exceptions import (
    FieldExistsError,
    FieldInUseError,
    FieldNotFoundError,
)
from course_archive.domain.courses.repositories import CourseFieldRepository
from course_archive.shared.logging import logger


class ListFieldsUseCase:
    def __init__(self, *, fields: CourseFieldRepository) -> None:
        self._fields = fields

    def execute(self) -> list[CourseField]:
        return self._fields.list_all()


class CreateFieldUseCase:
    def __init__(self, *, fields: CourseFieldRepository) -> None:
        self._fields = fields

    def execute(self, name: str) -> CourseField:
        name = name.strip()
        if self._fields.find_by_name(name) is not None:
            raise FieldExistsError(name)
        field = self._fields.add(name)
        logger.info(f"fields.create: id={field.id}")
        return field


class DeleteFieldUseCase:
    def __init__(self, *, fields: CourseFieldRepository) -> None:
        self._fields = fields

    def execute(self, field_id: int) -> None:
        field = self._fields.find_by_id(field_id)
        if field is None:
            raise FieldNotFoundError(field_id)
        if field.course_count:
            raise FieldInUseError(field_id, field.course_count)
        self._fields.delete(field_id)
        logger.info(f"fields.delete: id={field_id}")


__all__ = ["CreateFieldUseCase", "DeleteFieldUseCase", "ListFieldsUseCase"]
