# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date

from pydantic import Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from course_archive.domain.courses.entities import Course, CourseData, CourseField, CoursePage
from course_archive.shared.errors.validation_types import ValidationErrorType

from .base import CamelModel, require_not_blank


class FieldRequestDTO(CamelModel):
    name: str = Field(min_length=1, max_length=64)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return require_not_blank(value).strip()


class FieldRefDTO(CamelModel):
    id: int
    name: str


class FieldDTO(CamelModel):
    id: int
    name: str
    course_count: int = 0

    @classmethod
    def from_domain(cls, field: CourseField) -> FieldDTO:
        return cls(id=field.id, name=field.name, course_count=field.course_count)


class CourseRequestDTO(CamelModel):
    course_number: str = Field(min_length=1, max_length=32)
    course_code: str = Field(min_length=1, max_length=32)
    field_id: int = Field(ge=1)
    course_name: str = Field(min_length=1, max_length=128)
    course_venue: str = Field(min_length=1, max_length=128)
    course_start_date: date
    course_end_date: date
    course_duration: int = Field(ge=1)
    course_hours: int = Field(ge=1)
    number_of_beneficiaries: int = Field(ge=1)
    number_of_graduates: int = Field(ge=0)
    trainer_name: str = Field(min_length=1, max_length=128)
    trainer_phone_number: str = Field(min_length=1, max_length=32)
    notes: str | None = Field(None, max_length=1000)

    @field_validator(
        "course_number",
        "course_code",
        "course_name",
        "course_venue",
        "trainer_name",
        "trainer_phone_number",
    )
    @classmethod
    def validate_text(cls, value: str) -> str:
        return require_not_blank(value).strip()

    @model_validator(mode="after")
    def validate_consistency(self) -> CourseRequestDTO:
        if self.course_end_date < self.course_start_date:
            raise PydanticCustomError(
                ValidationErrorType.DATE_RANGE,
                "Course end date must not be before its start date",
                {},
            )
        if self.number_of_graduates > self.number_of_beneficiaries:
            raise PydanticCustomError(
                ValidationErrorType.GRADUATES_EXCEED_BENEFICIARIES,
                "Graduates cannot exceed beneficiaries",
                {},
            )
        return self

    def to_domain(self) -> CourseData:
        return CourseData(
            course_number=self.course_number,
            course_code=self.course_code,
            field_id=self.field_id,
            course_name=self.course_name,
            course_venue=self.course_venue,
            course_start_date=self.course_start_date,
            course_end_date=self.course_end_date,
            course_duration=self.course_duration,
            course_hours=self.course_hours,
            number_of_beneficiaries=self.number_of_beneficiaries,
            number_of_graduates=self.number_of_graduates,
            trainer_name=self.trainer_name,
            trainer_phone_number=self.trainer_phone_number,
            notes=(self.notes or "").strip() or None,
        )


class CourseDTO(CamelModel):
    id: int
    course_number: str
    course_code: str
    course_field: FieldRefDTO
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

    @classmethod
    def from_domain(cls, course: Course) -> CourseDTO:
        return cls(
            id=course.id,
            course_number=course.course_number,
            course_code=course.course_code,
            course_field=FieldRefDTO(id=course.field.id, name=course.field.name),
            course_name=course.course_name,
            course_venue=course.course_venue,
            course_start_date=course.course_start_date,
            course_end_date=course.course_end_date,
            course_duration=course.course_duration,
            course_hours=course.course_hours,
            number_of_beneficiaries=course.number_of_beneficiaries,
            number_of_graduates=course.number_of_graduates,
            trainer_name=course.trainer_name,
            trainer_phone_number=course.trainer_phone_number,
            notes=course.notes,
        )


class CourseQueryDTO(CamelModel):
    search: str | None = Field(None, max_length=128)
    field_id: int | None = Field(None, ge=1)
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)


class CourseListDTO(CamelModel):
    items: list[CourseDTO]
    total: int
    page: int
    limit: int

    @classmethod
    def from_domain(cls, page: CoursePage) -> CourseListDTO:
        return cls(
            items=[CourseDTO.from_domain(course) for course in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
        )
