# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict
from typing import NoReturn

from sqlalchemy import desc, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from course_archive.domain.courses.entities import Course as DomainCourse
from course_archive.domain.courses.entities import CourseData
from course_archive.domain.courses.entities import CourseField as DomainCourseField
from course_archive.domain.courses.entities import CoursePage, FieldRef
from course_archive.domain.courses.exceptions import (
    CourseNumberExistsError,
    FieldExistsError,
    FieldInUseError,
    FieldNotFoundError,
)
from course_archive.domain.courses.repositories import (
    CourseFieldRepository,
    CourseRepository,
)
from course_archive.infrastructure.db.models import Course, CourseField
from course_archive.infrastructure.unit_of_work import unit_of_work_scope


def course_to_domain(row: Course) -> DomainCourse:
    return DomainCourse(
        id=row.id,
        course_number=row.course_number,
        course_code=row.course_code,
        field=FieldRef(id=row.field.id, name=row.field.name),
        course_name=row.course_name,
        course_venue=row.course_venue,
        course_start_date=row.course_start_date,
        course_end_date=row.course_end_date,
        course_duration=row.course_duration,
        course_hours=row.course_hours,
        number_of_beneficiaries=row.number_of_beneficiaries,
        number_of_graduates=row.number_of_graduates,
        trainer_name=row.trainer_name,
        trainer_phone_number=row.trainer_phone_number,
        notes=row.notes,
    )


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlAlchemyCourseFieldRepository(CourseFieldRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _counted(self, session: Session):
        return (
            session.query(CourseField, func.count(Course.id).label("course_count"))
            .outerjoin(Course, Course.field_id == CourseField.id)
            .group_by(CourseField.id)
        )

    def list_all(self) -> list[DomainCourseField]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = self._counted(session).order_by(CourseField.name).all()
            return [
                DomainCourseField(id=field.id, name=field.name, course_count=count)
                for field, count in rows
            ]

    def find_by_id(self, field_id: int) -> DomainCourseField | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._counted(session).filter(CourseField.id == field_id).first()
            if row is None:
                return None
            field, count = row
            return DomainCourseField(id=field.id, name=field.name, course_count=count)

    def find_by_name(self, name: str) -> DomainCourseField | None:
        with unit_of_work_scope(self._session_factory) as session:
            field = (
                session.query(CourseField)
                .filter(func.lower(CourseField.name) == name.lower())
                .first()
            )
            if field is None:
                return None
            return DomainCourseField(id=field.id, name=field.name)

    def add(self, name: str) -> DomainCourseField:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                field = CourseField(name=name)
                session.add(field)
                session.flush()
                return DomainCourseField(id=field.id, name=field.name)
        except IntegrityError as exc:
            raise FieldExistsError(name) from exc

    def delete(self, field_id: int) -> None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                session.query(CourseField).filter(CourseField.id == field_id).delete()
        except IntegrityError as exc:
            # A course was attached after the in-use check.
            field = self.find_by_id(field_id)
            raise FieldInUseError(field_id, field.course_count if field else 0) from exc


class SqlAlchemyCourseRepository(CourseRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def search(
        self,
        *,
        query: str | None,
        field_id: int | None,
        page: int,
        limit: int,
    ) -> CoursePage:
        with unit_of_work_scope(self._session_factory) as session:
            q = session.query(Course)

            if query:
                pattern = _like_pattern(query)
                q = q.filter(
                    or_(
                        Course.course_name.ilike(pattern, escape="\\"),
                        Course.course_number.ilike(pattern, escape="\\"),
                        Course.trainer_name.ilike(pattern, escape="\\"),
                    )
                )
            if field_id is not None:
                q = q.filter(Course.field_id == field_id)

            total = q.count()

            rows = (
                q.options(joinedload(Course.field))
                .order_by(desc(Course.course_start_date), desc(Course.id))
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
            return CoursePage(
                items=[course_to_domain(row) for row in rows],
                total=total,
                page=page,
                limit=limit,
            )

    def find_by_id(self, course_id: int) -> DomainCourse | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(Course)
                .options(joinedload(Course.field))
                .filter(Course.id == course_id)
                .first()
            )
            return course_to_domain(row) if row else None

    def find_id_by_number(self, course_number: str) -> int | None:
        with unit_of_work_scope(self._session_factory) as session:
            return (
                session.query(Course.id)
                .filter(Course.course_number == course_number)
                .scalar()
            )

    def _raise_conflict(
        self, exc: IntegrityError, data: CourseData, course_id: int | None
    ) -> NoReturn:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            field_exists = session.get(CourseField, data.field_id) is not None
            owner = (
                session.query(Course.id)
                .filter(Course.course_number == data.course_number)
                .scalar()
            )
        if not field_exists:
            raise FieldNotFoundError(data.field_id) from exc
        if owner is not None and owner != course_id:
            raise CourseNumberExistsError(data.course_number) from exc
        raise exc

    def add(self, data: CourseData) -> DomainCourse:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = Course(**asdict(data))
                session.add(row)
                session.flush()
                session.refresh(row)
                return course_to_domain(row)
        except IntegrityError as exc:
            self._raise_conflict(exc, data, None)

    def update(self, course_id: int, data: CourseData) -> DomainCourse | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(Course, course_id)
                if row is None:
                    return None
                for key, value in asdict(data).items():
                    setattr(row, key, value)
                session.flush()
                session.refresh(row)
                return course_to_domain(row)
        except IntegrityError as exc:
            self._raise_conflict(exc, data, course_id)

    def delete(self, course_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            deleted = session.query(Course).filter(Course.id == course_id).delete()
            return deleted > 0


__all__ = [
    "SqlAlchemyCourseFieldRepository",
    "SqlAlchemyCourseRepository",
    "course_to_domain",
]
