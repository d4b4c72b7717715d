# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import calendar
from collections.abc import Callable
from datetime import date
from typing import Any

from course_archive.domain.courses.repositories import StatisticsRepository

RECENT_COURSES = 5
MONTHS_BACK = 6


def months_before(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class GetDashboardStatsUseCase:
    def __init__(
        self,
        stats_repo: StatisticsRepository,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repo = stats_repo
        self._today = today

    def execute(self) -> dict[str, Any]:
        since = months_before(self._today(), MONTHS_BACK)
        monthly = self._repo.monthly_totals(start=since)
        return {
            "overview": self._repo.overview(),
            "courses_by_field": self._repo.courses_by_field(),
            "recent_courses": self._repo.recent_courses(RECENT_COURSES),
            "courses_by_month": [
                {
                    "month": f"{row['year']:04d}-{row['month']:02d}",
                    "count": row["courses"],
                    "graduates": row["graduates"],
                }
                for row in reversed(monthly)
            ],
        }


__all__ = ["GetDashboardStatsUseCase", "months_before"]
