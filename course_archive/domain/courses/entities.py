# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(slots=True, frozen=True)
class FieldRef:
    id: int
    name: str


@dataclass(slots=True, frozen=True)
class CourseField:
    id: int
    name: str
    course_count: int = 0


@dataclass(slots=True, frozen=True)
class CourseData:
    """Writable attributes of a course, as submitted by the client."""

    course_number: str
    course_code: str
    field_id: int
    course_name: str
    course_venue: str
    course_start_date: date
    course_end_date: date
    course_duration: int
    course_hours: int
    number_of_beneficiaries: int
    number_of_graduates: int
    trainer_name: str
    trainer_phone_number: str
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class Course:
    id: int
    course_number: str
    course_code: str
    field: FieldRef
    course_name: str
    course_venue: str
    course_start_date: date
    course_end_date: date
    course_duration: int
    course_hours: int
    number_of_beneficiaries: int
    number_of_graduates: int
    trainer_name: str
    trainer_phone_number: str
    notes: str | None


@dataclass(slots=True, frozen=True)
class CoursePage:
    items: list[Course]
    total: int
    page: int
    limit: int
