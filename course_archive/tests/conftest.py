from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="course-archive-tests-"))

# Settings and the engine are built at import time.
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["LOG_FILE"] = str(_TMP / "app.log")
os.environ["JWT_SECRET"] = "test-signing-secret-that-is-long-enough-for-hs256"
os.environ["JWT_EXPIRES_IN"] = "1d"
os.environ["PASSWORD_CHANGE_KEY"] = "ROT-KEY"
os.environ["APP_ENV"] = "test"
os.environ.pop("DEBUG_LOGGING", None)

from collections.abc import Callable, Iterator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from course_archive.app import create_app  # noqa: E402
from course_archive.infrastructure.container import container  # noqa: E402
from course_archive.infrastructure.db import ENGINE, Base  # noqa: E402


@pytest.fixture()
def reset_database() -> Iterator[None]:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def client(reset_database: None) -> Iterator[FlaskClient]:
    container.admin_setup.seed("s3cret")
    app = create_app()
    with app.test_client() as client:
        token = client.post("/api/auth/login", json={"password": "s3cret"}).get_json()["token"]
        client.environ_base["HTTP_AUTHORIZATION"] = f"Bearer {token}"
        yield client


@pytest.fixture()
def course_payload() -> Callable[..., dict[str, Any]]:
    def build(field_id: int, **overrides: Any) -> dict[str, Any]:
        payload = {
            "courseNumber": "C-001",
            "courseCode": "SAF-1",
            "fieldId": field_id,
            "courseName": "Workplace Safety",
            "courseVenue": "Hall A",
            "courseStartDate": "2024-02-01",
            "courseEndDate": "2024-02-05",
            "courseDuration": 5,
            "courseHours": 20,
            "numberOfBeneficiaries": 12,
            "numberOfGraduates": 10,
            "trainerName": "Dana",
            "trainerPhoneNumber": "+15550100",
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture()
def create_field(client: FlaskClient) -> Callable[..., int]:
    def create(name: str = "Safety") -> int:
        response = client.post("/api/fields", json={"name": name})
        assert response.status_code == 201
        return response.get_json()["data"]["id"]

    return create
