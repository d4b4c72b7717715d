# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from course_archive.domain.courses.entities import Course, CourseData, CoursePage
from course_archive.domain.courses.exceptions import (
    CourseNotFoundError,
    CourseNumberExistsError,
    FieldNotFoundError,
)
from course_archive.domain.courses.repositories import (
    CourseFieldRepository,
    CourseRepository,
)
from course_archive.shared.logging import logger


class SearchCoursesUseCase:
    def __init__(self, *, courses: CourseRepository) -> None:
        self._courses = courses

    def execute(
        self,
        *,
        query: str | None = None,
        field_id: int | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> CoursePage:
        query = (query or "").strip() or None
        return self._courses.search(query=query, field_id=field_id, page=page, limit=limit)


class GetCourseUseCase:
    def __init__(self, *, courses: CourseRepository) -> None:
        self._courses = courses

    def execute(self, course_id: int) -> Course:
        course = self._courses.find_by_id(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course


class _CourseWriter:
    def __init__(self, *, courses: CourseRepository, fields: CourseFieldRepository) -> None:
        self._courses = courses
        self._fields = fields

    def _check_references(self, data: CourseData, *, course_id: int | None = None) -> None:
        if self._fields.find_by_id(data.field_id) is None:
            raise FieldNotFoundError(data.field_id)
        owner = self._courses.find_id_by_number(data.course_number)
        if owner is not None and owner != course_id:
            raise CourseNumberExistsError(data.course_number)


class CreateCourseUseCase(_CourseWriter):
    def execute(self, data: CourseData) -> Course:
        self._check_references(data)
        course = self._courses.add(data)
        logger.info(f"courses.create: id={course.id} number={course.course_number}")
        return course


class UpdateCourseUseCase(_CourseWriter):
    def execute(self, course_id: int, data: CourseData) -> Course:
        if self._courses.find_by_id(course_id) is None:
            raise CourseNotFoundError(course_id)
        self._check_references(data, course_id=course_id)
        course = self._courses.update(course_id, data)
        if course is None:
            raise CourseNotFoundError(course_id)
        logger.info(f"courses.update: id={course_id}")
        return course


class DeleteCourseUseCase:
    def __init__(self, *, courses: CourseRepository) -> None:
        self._courses = courses

    def execute(self, course_id: int) -> None:
        if not self._courses.delete(course_id):
            raise CourseNotFoundError(course_id)
        logger.info(f"courses.delete: id={course_id}")


__all__ = [
    "CreateCourseUseCase",
    "DeleteCourseUseCase",
    "GetCourseUseCase",
    "SearchCoursesUseCase",
    "UpdateCourseUseCase",
]
