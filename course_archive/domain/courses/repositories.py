# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date
from typing import Any, Protocol

from .entities import Course, CourseData, CourseField, CoursePage


class CourseFieldRepository(Protocol):
    def list_all(self) -> list[CourseField]: ...
    def find_by_id(self, field_id: int) -> CourseField | None: ...
    def find_by_name(self, name: str) -> CourseField | None: ...
    def add(self, name: str) -> CourseField: ...
    def delete(self, field_id: int) -> None: ...


class CourseRepository(Protocol):
    def search(
        self,
        *,
        query: str | None,
        field_id: int | None,
        page: int,
        limit: int,
    ) -> CoursePage: ...
    def find_by_id(self, course_id: int) -> Course | None: ...
    def find_id_by_number(self, course_number: str) -> int | None: ...
    def add(self, data: CourseData) -> Course: ...
    def update(self, course_id: int, data: CourseData) -> Course | None: ...
    def delete(self, course_id: int) -> bool: ...


class StatisticsRepository(Protocol):
    def overview(
        self, *, start: date | None = None, end: date | None = None
    ) -> dict[str, int]: ...
    def courses_by_field(self) -> list[dict[str, Any]]: ...
    def recent_courses(self, limit: int) -> list[Course]: ...
    def monthly_totals(self, *, start: date, end: date | None = None) -> list[dict[str, int]]: ...
    def field_totals(self) -> list[dict[str, Any]]: ...
    def trainer_totals(self) -> list[dict[str, Any]]: ...
