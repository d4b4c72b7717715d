# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Course, CourseData, CourseField, CoursePage, FieldRef
from .exceptions import (
    CourseNotFoundError,
    CourseNumberExistsError,
    FieldExistsError,
    FieldInUseError,
    FieldNotFoundError,
)
from .repositories import CourseFieldRepository, CourseRepository, StatisticsRepository

__all__ = [
    "Course",
    "CourseData",
    "CourseField",
    "CourseFieldRepository",
    "CourseNotFoundError",
    "CourseNumberExistsError",
    "CoursePage",
    "CourseRepository",
    "FieldExistsError",
    "FieldInUseError",
    "FieldNotFoundError",
    "FieldRef",
    "StatisticsRepository",
]
