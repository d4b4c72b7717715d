from __future__ import annotations

from datetime import date

import pytest
from flask.testing import FlaskClient

from course_archive.application.use_cases.stats.get_dashboard_stats import (
    GetDashboardStatsUseCase,
    months_before,
)


@pytest.mark.parametrize(
    ("day", "months", "expected"),
    [
        (date(2024, 8, 31), 6, date(2024, 2, 29)),
        (date(2024, 3, 15), 6, date(2023, 9, 15)),
        (date(2024, 1, 1), 0, date(2024, 1, 1)),
    ],
)
def test_months_before(day: date, months: int, expected: date) -> None:
    assert months_before(day, months) == expected


def test_dashboard_months_are_newest_first() -> None:
    class StubStats:
        def overview(self, *, start=None, end=None):
            return {
                "total_courses": 0,
                "total_graduates": 0,
                "total_hours": 0,
                "total_beneficiaries": 0,
            }

        def courses_by_field(self):
            return []

        def recent_courses(self, limit):
            return []

        def monthly_totals(self, *, start, end=None):
            self.start = start
            return [
                {"year": 2024, "month": 1, "courses": 1, "graduates": 2, "hours": 3},
                {"year": 2024, "month": 3, "courses": 4, "graduates": 5, "hours": 6},
            ]

    stats = StubStats()
    result = GetDashboardStatsUseCase(stats, today=lambda: date(2024, 4, 10)).execute()

    assert stats.start == date(2023, 10, 10)
    assert [row["month"] for row in result["courses_by_month"]] == ["2024-03", "2024-01"]


def test_dashboard_on_empty_archive_reports_zeros(client: FlaskClient) -> None:
    response = client.get("/api/stats/dashboard")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["overview"] == {
        "totalCourses": 0,
        "totalGraduates": 0,
        "totalHours": 0,
        "totalBeneficiaries": 0,
    }
    assert data["recentCourses"] == []
    assert data["coursesByMonth"] == []


def test_yearly_stats_group_by_month(client: FlaskClient, course_payload, create_field) -> None:
    field_id = create_field()
    client.post("/api/courses", json=course_payload(field_id, courseNumber="A"))
    client.post(
        "/api/courses",
        json=course_payload(
            field_id, courseNumber="B", courseStartDate="2024-02-20", courseEndDate="2024-02-22"
        ),
    )
    client.post(
        "/api/courses",
        json=course_payload(
            field_id, courseNumber="C", courseStartDate="2023-05-01", courseEndDate="2023-05-02"
        ),
    )

    data = client.get("/api/stats/yearly/2024").get_json()["data"]

    assert data["year"] == 2024
    assert data["overview"]["totalCourses"] == 2
    assert data["overview"]["totalGraduates"] == 20
    assert data["monthlyBreakdown"] == [{"month": 2, "courses": 2, "graduates": 20, "hours": 40}]


def test_yearly_stats_reject_out_of_range_year(client: FlaskClient) -> None:
    response = client.get("/api/stats/yearly/1200")

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["type"] == "year_out_of_range"


def test_field_and_trainer_totals(client: FlaskClient, course_payload, create_field) -> None:
    safety = create_field("Safety")
    create_field("Empty")
    client.post("/api/courses", json=course_payload(safety))

    fields = client.get("/api/stats/fields").get_json()["data"]
    assert [row["name"] for row in fields] == ["Safety", "Empty"]
    assert fields[0]["totalHours"] == 20
    assert fields[1]["totalCourses"] == 0
    assert fields[1]["totalGraduates"] == 0

    trainers = client.get("/api/stats/trainers").get_json()["data"]
    assert trainers == [
        {
            "name": "Dana",
            "phone": "+15550100",
            "totalCourses": 1,
            "totalGraduates": 10,
            "totalHours": 20,
        }
    ]
