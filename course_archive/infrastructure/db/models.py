# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from datetime import UTC, date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from course_archive.infrastructure.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Credential(Base):
    # One row at most; see infrastructure.admin_setup.
    __tablename__ = "credentials"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    secret_hash: Mapped[str] = mapped_column(String(256))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


class CourseField(Base):
    __tablename__ = "course_fields"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    courses: Mapped[list["Course"]] = relationship("Course", back_populates="field")


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("course_end_date >= course_start_date", name="ck_course_dates"),
        CheckConstraint(
            "number_of_graduates <= number_of_beneficiaries", name="ck_course_graduates"
        ),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    course_number: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    course_code: Mapped[str] = mapped_column(String(32))
    field_id: Mapped[int] = mapped_column(
        ForeignKey("course_fields.id", ondelete="RESTRICT"), index=True
    )
    course_name: Mapped[str] = mapped_column(String(128), index=True)
    course_venue: Mapped[str] = mapped_column(String(128))
    course_start_date: Mapped[date] = mapped_column(Date, index=True)
    course_end_date: Mapped[date] = mapped_column(Date)
    course_duration: Mapped[int] = mapped_column(Integer)
    course_hours: Mapped[int] = mapped_column(Integer)
    number_of_beneficiaries: Mapped[int] = mapped_column(Integer)
    number_of_graduates: Mapped[int] = mapped_column(Integer, default=0)
    trainer_name: Mapped[str] = mapped_column(String(128), index=True)
    trainer_phone_number: Mapped[str] = mapped_column(String(32))
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    field: Mapped[CourseField] = relationship("CourseField", back_populates="courses")
