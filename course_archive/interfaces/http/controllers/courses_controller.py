# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from course_archive.application.use_cases.auth.verify_token import VerifyTokenUseCase
from course_archive.application.use_cases.courses.manage_courses import (
    CreateCourseUseCase,
    DeleteCourseUseCase,
    GetCourseUseCase,
    SearchCoursesUseCase,
    UpdateCourseUseCase,
)
from course_archive.application.use_cases.courses.manage_fields import (
    CreateFieldUseCase,
    DeleteFieldUseCase,
    ListFieldsUseCase,
)
from course_archive.domain.courses.entities import CourseData
from course_archive.infrastructure.auth_middleware import protect_blueprint
from course_archive.interfaces.http.dto.courses import (
    CourseDTO,
    CourseListDTO,
    CourseQueryDTO,
    CourseRequestDTO,
    FieldDTO,
    FieldRequestDTO,
)
from course_archive.shared.errors.validation import raise_validation_error


def _envelope(data, *, message: str | None = None) -> dict:
    payload = {"success": True, "data": data}
    if message:
        payload["message"] = message
    return payload


def _course_payload() -> CourseData:
    try:
        dto = CourseRequestDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)
    return dto.to_domain()


class CoursesController:
    def __init__(
        self,
        *,
        verify_token: VerifyTokenUseCase,
        search_courses: SearchCoursesUseCase,
        get_course: GetCourseUseCase,
        create_course: CreateCourseUseCase,
        update_course: UpdateCourseUseCase,
        delete_course: DeleteCourseUseCase,
    ) -> None:
        self._verify_token = verify_token
        self._search_courses = search_courses
        self._get_course = get_course
        self._create_course = create_course
        self._update_course = update_course
        self._delete_course = delete_course

    def list_courses(self) -> tuple[Response, int]:
        try:
            query = CourseQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        page = self._search_courses.execute(
            query=query.search,
            field_id=query.field_id,
            page=query.page,
            limit=query.limit,
        )
        return jsonify(_envelope(CourseListDTO.from_domain(page).model_dump(mode="json"))), 200

    def get_course(self, course_id: int) -> tuple[Response, int]:
        course = self._get_course.execute(course_id)
        return jsonify(_envelope(CourseDTO.from_domain(course).model_dump(mode="json"))), 200

    def create_course(self) -> tuple[Response, int]:
        course = self._create_course.execute(_course_payload())
        data = CourseDTO.from_domain(course).model_dump(mode="json")
        return jsonify(_envelope(data, message="Course created successfully")), 201

    def update_course(self, course_id: int) -> tuple[Response, int]:
        course = self._update_course.execute(course_id, _course_payload())
        data = CourseDTO.from_domain(course).model_dump(mode="json")
        return jsonify(_envelope(data, message="Course updated successfully")), 200

    def delete_course(self, course_id: int) -> tuple[Response, int]:
        self._delete_course.execute(course_id)
        return jsonify({"success": True, "message": "Course deleted successfully"}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("courses", __name__, url_prefix="/api/courses")
        bp.add_url_rule("", view_func=self.list_courses, methods=["GET"])
        bp.add_url_rule("", view_func=self.create_course, methods=["POST"])
        bp.add_url_rule("/<int:course_id>", view_func=self.get_course, methods=["GET"])
        bp.add_url_rule("/<int:course_id>", view_func=self.update_course, methods=["PUT"])
        bp.add_url_rule("/<int:course_id>", view_func=self.delete_course, methods=["DELETE"])
        return protect_blueprint(bp, self._verify_token)


class FieldsController:
    def __init__(
        self,
        *,
        verify_token: VerifyTokenUseCase,
        list_fields: ListFieldsUseCase,
        create_field: CreateFieldUseCase,
        delete_field: DeleteFieldUseCase,
    ) -> None:
        self._verify_token = verify_token
        self._list_fields = list_fields
        self._create_field = create_field
        self._delete_field = delete_field

    def list_fields(self) -> tuple[Response, int]:
        fields = [FieldDTO.from_domain(f).model_dump(mode="json") for f in self._list_fields.execute()]
        return jsonify(_envelope(fields)), 200

    def create_field(self) -> tuple[Response, int]:
        try:
            dto = FieldRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        field = self._create_field.execute(dto.name)
        data = FieldDTO.from_domain(field).model_dump(mode="json")
        return jsonify(_envelope(data, message="Course field created successfully")), 201

    def delete_field(self, field_id: int) -> tuple[Response, int]:
        self._delete_field.execute(field_id)
        return jsonify({"success": True, "message": "Course field deleted successfully"}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("fields", __name__, url_prefix="/api/fields")
        bp.add_url_rule("", view_func=self.list_fields, methods=["GET"])
        bp.add_url_rule("", view_func=self.create_field, methods=["POST"])
        bp.add_url_rule("/<int:field_id>", view_func=self.delete_field, methods=["DELETE"])
        return protect_blueprint(bp, self._verify_token)
