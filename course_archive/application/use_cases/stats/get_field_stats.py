# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from course_archive.domain.courses.repositories import StatisticsRepository


class GetFieldStatsUseCase:
    def __init__(self, stats_repo: StatisticsRepository) -> None:
        self._repo = stats_repo

    def execute(self) -> list[dict[str, Any]]:
        return self._repo.field_totals()


__all__ = ["GetFieldStatsUseCase"]
