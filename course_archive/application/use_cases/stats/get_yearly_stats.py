# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

from course_archive.domain.courses.repositories import StatisticsRepository


class GetYearlyStatsUseCase:
    def __init__(
        self,
        stats_repo: StatisticsRepository,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repo = stats_repo
        self._today = today

    def execute(self, year: int | None = None) -> dict[str, Any]:
        year = year or self._today().year
        start, end = date(year, 1, 1), date(year, 12, 31)
        monthly = self._repo.monthly_totals(start=start, end=end)
        return {
            "year": year,
            "overview": self._repo.overview(start=start, end=end),
            "monthly_breakdown": [
                {
                    "month": row["month"],
                    "courses": row["courses"],
                    "graduates": row["graduates"],
                    "hours": row["hours"],
                }
                for row in monthly
            ],
        }


__all__ = ["GetYearlyStatsUseCase"]
