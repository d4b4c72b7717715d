# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from course_archive.application.services.password_hashing import WerkzeugPasswordHasher
from course_archive.application.services.tokens import JwtTokenService
from course_archive.application.use_cases.auth.change_password import ChangePasswordUseCase
from course_archive.application.use_cases.auth.login import LoginUseCase
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
from course_archive.application.use_cases.stats.get_dashboard_stats import GetDashboardStatsUseCase
from course_archive.application.use_cases.stats.get_field_stats import GetFieldStatsUseCase
from course_archive.application.use_cases.stats.get_trainer_stats import GetTrainerStatsUseCase
from course_archive.application.use_cases.stats.get_yearly_stats import GetYearlyStatsUseCase
from course_archive.infrastructure.admin_setup import AdminSetup
from course_archive.infrastructure.db import SessionLocal
from course_archive.infrastructure.repositories.course_repository import (
    SqlAlchemyCourseFieldRepository,
    SqlAlchemyCourseRepository,
)
from course_archive.infrastructure.repositories.credential_repository import (
    SqlAlchemyCredentialRepository,
)
from course_archive.infrastructure.repositories.statistics_repository import (
    SqlAlchemyStatisticsRepository,
)
from course_archive.interfaces.http.controllers.auth_controller import AuthController
from course_archive.interfaces.http.controllers.courses_controller import (
    CoursesController,
    FieldsController,
)
from course_archive.interfaces.http.controllers.stats_controller import StatsController
from course_archive.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    # Auth

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def credential_repository(self) -> SqlAlchemyCredentialRepository:
        return SqlAlchemyCredentialRepository()

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=self._config.auth.jwt_secret,
            ttl=self._config.auth.token_ttl,
        )

    @cached_property
    def admin_setup(self) -> AdminSetup:
        return AdminSetup(
            credentials=self.credential_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_use_case(self) -> LoginUseCase:
        return LoginUseCase(
            credentials=self.credential_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def verify_token_use_case(self) -> VerifyTokenUseCase:
        return VerifyTokenUseCase(tokens=self.token_service)

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            credentials=self.credential_repository,
            password_hasher=self.password_hasher,
            rotation_key=self._config.auth.password_change_key,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_use_case,
            change_password_use_case=self.change_password_use_case,
            verify_token_use_case=self.verify_token_use_case,
        )

    # Courses

    @cached_property
    def field_repository(self) -> SqlAlchemyCourseFieldRepository:
        return SqlAlchemyCourseFieldRepository(SessionLocal)

    @cached_property
    def course_repository(self) -> SqlAlchemyCourseRepository:
        return SqlAlchemyCourseRepository(SessionLocal)

    @cached_property
    def fields_controller(self) -> FieldsController:
        return FieldsController(
            verify_token=self.verify_token_use_case,
            list_fields=ListFieldsUseCase(fields=self.field_repository),
            create_field=CreateFieldUseCase(fields=self.field_repository),
            delete_field=DeleteFieldUseCase(fields=self.field_repository),
        )

    @cached_property
    def courses_controller(self) -> CoursesController:
        return CoursesController(
            verify_token=self.verify_token_use_case,
            search_courses=SearchCoursesUseCase(courses=self.course_repository),
            get_course=GetCourseUseCase(courses=self.course_repository),
            create_course=CreateCourseUseCase(
                courses=self.course_repository, fields=self.field_repository
            ),
            update_course=UpdateCourseUseCase(
                courses=self.course_repository, fields=self.field_repository
            ),
            delete_course=DeleteCourseUseCase(courses=self.course_repository),
        )

    # Statistics

    @cached_property
    def statistics_repository(self) -> SqlAlchemyStatisticsRepository:
        return SqlAlchemyStatisticsRepository(SessionLocal)

    @cached_property
    def stats_controller(self) -> StatsController:
        return StatsController(
            verify_token=self.verify_token_use_case,
            get_dashboard_stats=GetDashboardStatsUseCase(self.statistics_repository),
            get_field_stats=GetFieldStatsUseCase(self.statistics_repository),
            get_trainer_stats=GetTrainerStatsUseCase(self.statistics_repository),
            get_yearly_stats=GetYearlyStatsUseCase(self.statistics_repository),
        )


container = Container()
