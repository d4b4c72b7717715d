# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

from sqlalchemy import desc, extract, func
from sqlalchemy.orm import Session, joinedload

from course_archive.domain.courses.entities import Course as DomainCourse
from course_archive.domain.courses.repositories import StatisticsRepository
from course_archive.infrastructure.db.models import Course, CourseField
from course_archive.infrastructure.repositories.course_repository import course_to_domain
from course_archive.infrastructure.unit_of_work import unit_of_work_scope


def _total(column) -> Any:
    return func.coalesce(func.sum(column), 0)


def _in_range(query, start: date | None, end: date | None):
    if start is not None:
        query = query.filter(Course.course_start_date >= start)
    if end is not None:
        query = query.filter(Course.course_start_date <= end)
    return query


class SqlAlchemyStatisticsRepository(StatisticsRepository):
    """Grouped SUM/COUNT queries over the course archive.

    Sums are coalesced to 0 so an empty archive reports zeros, never nulls.
    Postgres returns Decimal for SUM/EXTRACT, hence the int() conversions.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def overview(
        self, *, start: date | None = None, end: date | None = None
    ) -> dict[str, int]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            query = session.query(
                func.count(Course.id),
                _total(Course.number_of_graduates),
                _total(Course.course_hours),
                _total(Course.number_of_beneficiaries),
            )
            courses, graduates, hours, beneficiaries = _in_range(query, start, end).one()
        return {
            "total_courses": int(courses),
            "total_graduates": int(graduates),
            "total_hours": int(hours),
            "total_beneficiaries": int(beneficiaries),
        }

    def courses_by_field(self) -> list[dict[str, Any]]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            course_count = func.count(Course.id).label("course_count")
            rows = (
                session.query(CourseField.id, CourseField.name, course_count)
                .outerjoin(Course, Course.field_id == CourseField.id)
                .group_by(CourseField.id, CourseField.name)
                .order_by(desc(course_count), CourseField.name)
                .all()
            )
        return [{"id": fid, "name": name, "count": int(count)} for fid, name, count in rows]

    def recent_courses(self, limit: int) -> list[DomainCourse]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = (
                session.query(Course)
                .options(joinedload(Course.field))
                .order_by(desc(Course.course_start_date), desc(Course.id))
                .limit(limit)
                .all()
            )
            return [course_to_domain(row) for row in rows]

    def monthly_totals(self, *, start: date, end: date | None = None) -> list[dict[str, int]]:
        year = extract("year", Course.course_start_date).label("year")
        month = extract("month", Course.course_start_date).label("month")
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            query = session.query(
                year,
                month,
                func.count(Course.id),
                _total(Course.number_of_graduates),
                _total(Course.course_hours),
            )
            rows = (
                _in_range(query, start, end)
                .group_by(year, month)
                .order_by(year, month)
                .all()
            )
        return [
            {
                "year": int(y),
                "month": int(m),
                "courses": int(courses),
                "graduates": int(graduates),
                "hours": int(hours),
            }
            for y, m, courses, graduates, hours in rows
        ]

    def field_totals(self) -> list[dict[str, Any]]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            course_count = func.count(Course.id).label("course_count")
            rows = (
                session.query(
                    CourseField.id,
                    CourseField.name,
                    course_count,
                    _total(Course.number_of_graduates),
                    _total(Course.number_of_beneficiaries),
                    _total(Course.course_hours),
                )
                .outerjoin(Course, Course.field_id == CourseField.id)
                .group_by(CourseField.id, CourseField.name)
                .order_by(desc(course_count), CourseField.name)
                .all()
            )
        return [
            {
                "id": fid,
                "name": name,
                "total_courses": int(courses),
                "total_graduates": int(graduates),
                "total_beneficiaries": int(beneficiaries),
                "total_hours": int(hours),
            }
            for fid, name, courses, graduates, beneficiaries, hours in rows
        ]

    def trainer_totals(self) -> list[dict[str, Any]]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            course_count = func.count(Course.id).label("course_count")
            rows = (
                session.query(
                    Course.trainer_name,
                    Course.trainer_phone_number,
                    course_count,
                    _total(Course.number_of_graduates),
                    _total(Course.course_hours),
                )
                .group_by(Course.trainer_name, Course.trainer_phone_number)
                .order_by(desc(course_count), Course.trainer_name)
                .all()
            )
        return [
            {
                "name": name,
                "phone": phone,
                "total_courses": int(courses),
                "total_graduates": int(graduates),
                "total_hours": int(hours),
            }
            for name, phone, courses, graduates, hours in rows
        ]


__all__ = ["SqlAlchemyStatisticsRepository"]
