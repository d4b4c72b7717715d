from __future__ import annotations

from datetime import date

import pytest

from course_archive.domain.courses.entities import CourseData
from course_archive.domain.courses.exceptions import (
    CourseNumberExistsError,
    FieldExistsError,
    FieldInUseError,
    FieldNotFoundError,
)
from course_archive.infrastructure.container import container

pytestmark = pytest.mark.usefixtures("reset_database")


def course_data(field_id: int, **overrides) -> CourseData:
    values = {
        "course_number": "C-001",
        "course_code": "SAF-1",
        "field_id": field_id,
        "course_name": "Workplace Safety",
        "course_venue": "Hall A",
        "course_start_date": date(2024, 2, 1),
        "course_end_date": date(2024, 2, 5),
        "course_duration": 5,
        "course_hours": 20,
        "number_of_beneficiaries": 12,
        "number_of_graduates": 10,
        "trainer_name": "Dana",
        "trainer_phone_number": "+15550100",
    }
    values.update(overrides)
    return CourseData(**values)


# These call the repositories directly, as a request that lost the race
# against the use-case checks would.


def test_duplicate_field_insert_is_conflict() -> None:
    fields = container.field_repository
    fields.add("Safety")

    with pytest.raises(FieldExistsError):
        fields.add("Safety")


def test_duplicate_course_number_insert_is_conflict() -> None:
    field = container.field_repository.add("Safety")
    courses = container.course_repository
    courses.add(course_data(field.id))

    with pytest.raises(CourseNumberExistsError):
        courses.add(course_data(field.id))


def test_update_onto_taken_course_number_is_conflict() -> None:
    field = container.field_repository.add("Safety")
    courses = container.course_repository
    courses.add(course_data(field.id))
    other = courses.add(course_data(field.id, course_number="C-002"))

    with pytest.raises(CourseNumberExistsError):
        courses.update(other.id, course_data(field.id))


def test_course_insert_for_vanished_field_is_not_found() -> None:
    with pytest.raises(FieldNotFoundError):
        container.course_repository.add(course_data(999))


def test_deleting_referenced_field_is_conflict() -> None:
    fields = container.field_repository
    field = fields.add("Safety")
    container.course_repository.add(course_data(field.id))

    with pytest.raises(FieldInUseError) as exc_info:
        fields.delete(field.id)

    assert exc_info.value.context == {"field_id": field.id, "course_count": 1}
    assert fields.find_by_id(field.id) is not None
