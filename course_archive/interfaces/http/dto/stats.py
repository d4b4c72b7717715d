# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date

from course_archive.domain.courses.entities import Course

from .base import CamelModel
from .courses import FieldRefDTO


class OverviewDTO(CamelModel):
    total_courses: int
    total_graduates: int
    total_hours: int
    total_beneficiaries: int


class FieldCountDTO(CamelModel):
    id: int
    name: str
    count: int


class RecentCourseDTO(CamelModel):
    id: int
    course_number: str
    course_name: str
    course_field: FieldRefDTO
    course_start_date: date
    course_end_date: date
    number_of_graduates: int

    @classmethod
    def from_domain(cls, course: Course) -> RecentCourseDTO:
        return cls(
            id=course.id,
            course_number=course.course_number,
            course_name=course.course_name,
            course_field=FieldRefDTO(id=course.field.id, name=course.field.name),
            course_start_date=course.course_start_date,
            course_end_date=course.course_end_date,
            number_of_graduates=course.number_of_graduates,
        )


class MonthCountDTO(CamelModel):
    month: str
    count: int
    graduates: int


class DashboardStatsDTO(CamelModel):
    overview: OverviewDTO
    courses_by_field: list[FieldCountDTO]
    recent_courses: list[RecentCourseDTO]
    courses_by_month: list[MonthCountDTO]


class FieldStatsDTO(CamelModel):
    id: int
    name: str
    total_courses: int
    total_graduates: int
    total_beneficiaries: int
    total_hours: int


class TrainerStatsDTO(CamelModel):
    name: str
    phone: str
    total_courses: int
    total_graduates: int
    total_hours: int


class MonthlyBreakdownDTO(CamelModel):
    month: int
    courses: int
    graduates: int
    hours: int


class YearlyStatsDTO(CamelModel):
    year: int
    overview: OverviewDTO
    monthly_breakdown: list[MonthlyBreakdownDTO]
