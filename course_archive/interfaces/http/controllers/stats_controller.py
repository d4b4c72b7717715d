# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from course_archive.application.use_cases.auth.verify_token import VerifyTokenUseCase
from course_archive.application.use_cases.stats.get_dashboard_stats import GetDashboardStatsUseCase
from course_archive.application.use_cases.stats.get_field_stats import GetFieldStatsUseCase
from course_archive.application.use_cases.stats.get_trainer_stats import GetTrainerStatsUseCase
from course_archive.application.use_cases.stats.get_yearly_stats import GetYearlyStatsUseCase
from course_archive.infrastructure.auth_middleware import protect_blueprint
from course_archive.interfaces.http.dto.stats import (
    DashboardStatsDTO,
    FieldStatsDTO,
    OverviewDTO,
    RecentCourseDTO,
    TrainerStatsDTO,
    YearlyStatsDTO,
)
from course_archive.shared.errors.base import ValidationError
from course_archive.shared.errors.validation_types import ValidationErrorType
from course_archive.shared.logging import logger

MIN_YEAR, MAX_YEAR = 1900, 9999


class StatsController:
    def __init__(
        self,
        *,
        verify_token: VerifyTokenUseCase,
        get_dashboard_stats: GetDashboardStatsUseCase,
        get_field_stats: GetFieldStatsUseCase,
        get_trainer_stats: GetTrainerStatsUseCase,
        get_yearly_stats: GetYearlyStatsUseCase,
    ) -> None:
        self._verify_token = verify_token
        self._get_dashboard_stats = get_dashboard_stats
        self._get_field_stats = get_field_stats
        self._get_trainer_stats = get_trainer_stats
        self._get_yearly_stats = get_yearly_stats

    def dashboard(self) -> tuple[Response, int]:
        stats = self._get_dashboard_stats.execute()
        result = DashboardStatsDTO(
            overview=OverviewDTO(**stats["overview"]),
            courses_by_field=stats["courses_by_field"],
            recent_courses=[RecentCourseDTO.from_domain(c) for c in stats["recent_courses"]],
            courses_by_month=stats["courses_by_month"],
        )
        logger.info(f"stats.dashboard: {result.overview.total_courses} courses")
        return jsonify({"success": True, "data": result.model_dump(mode="json")}), 200

    def fields(self) -> tuple[Response, int]:
        data = [FieldStatsDTO(**row).model_dump(mode="json") for row in self._get_field_stats.execute()]
        return jsonify({"success": True, "data": data}), 200

    def trainers(self) -> tuple[Response, int]:
        data = [
            TrainerStatsDTO(**row).model_dump(mode="json")
            for row in self._get_trainer_stats.execute()
        ]
        return jsonify({"success": True, "data": data}), 200

    def yearly(self, year: int | None = None) -> tuple[Response, int]:
        if year is not None and not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(
                errors=[
                    {
                        "field": "year",
                        "type": ValidationErrorType.YEAR_OUT_OF_RANGE.value,
                        "message": f"Year must be between {MIN_YEAR} and {MAX_YEAR}",
                    }
                ]
            )
        stats = self._get_yearly_stats.execute(year)
        result = YearlyStatsDTO(
            year=stats["year"],
            overview=OverviewDTO(**stats["overview"]),
            monthly_breakdown=stats["monthly_breakdown"],
        )
        return jsonify({"success": True, "data": result.model_dump(mode="json")}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("stats", __name__, url_prefix="/api/stats")
        bp.add_url_rule("/dashboard", view_func=self.dashboard, methods=["GET"])
        bp.add_url_rule("/fields", view_func=self.fields, methods=["GET"])
        bp.add_url_rule("/trainers", view_func=self.trainers, methods=["GET"])
        bp.add_url_rule("/yearly", view_func=self.yearly, methods=["GET"])
        bp.add_url_rule("/yearly/<int:year>", view_func=self.yearly, methods=["GET"])
        return protect_blueprint(bp, self._verify_token)
