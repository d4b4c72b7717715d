# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from course_archive.shared.errors.base import AppError


class CourseNotFoundError(AppError):
    def __init__(self, course_id: int) -> None:
        super().__init__(
            code="course_not_found",
            status=HTTPStatus.NOT_FOUND,
            message="Course not found",
            context={"course_id": course_id},
        )


class CourseNumberExistsError(AppError):
    def __init__(self, course_number: str) -> None:
        super().__init__(
            code="course_number_exists",
            status=HTTPStatus.CONFLICT,
            message="A course with this number already exists",
            context={"course_number": course_number},
        )


class FieldNotFoundError(AppError):
    def __init__(self, field_id: int) -> None:
        super().__init__(
            code="field_not_found",
            status=HTTPStatus.NOT_FOUND,
            message="Course field not found",
            context={"field_id": field_id},
        )


class FieldExistsError(AppError):
    def __init__(self, name: str) -> None:
        super().__init__(
            code="field_exists",
            status=HTTPStatus.CONFLICT,
            message="A course field with this name already exists",
            context={"name": name},
        )


class FieldInUseError(AppError):
    def __init__(self, field_id: int, course_count: int) -> None:
        super().__init__(
            code="field_in_use",
            status=HTTPStatus.CONFLICT,
            message="Course field is still used by courses",
            context={"field_id": field_id, "course_count": course_count},
        )
