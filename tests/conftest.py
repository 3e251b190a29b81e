"""Shared pytest fixtures for the ICT observatory test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from src.db.base import SchoolRepository
from src.db.factory import get_school_repository
from src.db.models import Base, ICTReportRecord, SchoolRecord
from src.db.sqlite_repo import SQLiteSchoolRepository
from src.main import app
from src.schemas.report import ICTReport
from src.schemas.school import School
from tests.factories import make_report, make_school

# ---------------------------------------------------------------------------
# Test data helpers
# ---------------------------------------------------------------------------
#
# Expected readiness of the seeded schools:
#   SCH1 Kampala Parents School   63 High    (two reports, latest 2024-06-10)
#   SCH2 Gulu Primary School       5 Low     (no internet)
#   SCH3 Mbarara High School      31 Medium  (environment stored as lowercase "urban")
#   SCH4 Jinja College             0 Low     (no reports)
#   SCH5 Kitgum Community School  23 Low     ("Fiber" connection: online but 0 internet points)


def create_test_schools() -> list[School]:
    """Return a fresh list of school profiles across four regions."""
    return [
        make_school(
            "SCH1",
            "Kampala Parents School",
            district="Kampala",
            environment="Urban",
            sub_county="Nakawa",
            type="Primary",
            total_students=820,
            total_teachers=20,
            head_teacher_name="Grace Nakato",
            email="info@kps.ac.ug",
            phone="+256700000001",
        ),
        make_school(
            "SCH2",
            "Gulu Primary School",
            district="Gulu",
            environment="Rural",
            sub_county="Bardege",
            type="Primary",
            total_students=540,
            total_teachers=15,
            head_teacher_name="Okello James",
        ),
        make_school(
            "SCH3",
            "Mbarara High School",
            district="Mbarara",
            environment="urban",
            sub_county="Kakoba",
            type="Secondary",
            total_students=1200,
            total_teachers=30,
        ),
        make_school(
            "SCH4",
            "Jinja College",
            district="Jinja",
            environment="Urban",
            type="Secondary",
            total_students=950,
        ),
        make_school(
            "SCH5",
            "Kitgum Community School",
            district="Kitgum",
            environment="Rural",
            type="Primary",
            total_students=300,
            total_teachers=12,
        ),
    ]


def create_test_reports() -> list[ICTReport]:
    """Return observation reports for the seeded schools (SCH4 has none)."""
    return [
        make_report(
            "SCH1",
            "2023-03-15T10:00:00Z",
            report_id="RPT1",
            period="Term 1 2023",
            computers=40,
            tablets=10,
            functional_devices=35,
            internet_connection="Medium",
            power_backup=True,
            teachers_using_ict=10,
            total_teachers=20,
            weekly_computer_lab_hours=15,
            student_digital_literacy_rate=45,
            ict_trained_teachers=8,
            support_staff=1,
        ),
        make_report(
            "SCH1",
            "2024-06-10T10:00:00Z",
            report_id="RPT2",
            period="Term 2 2024",
            computers=100,
            tablets=20,
            functional_devices=90,
            internet_connection="Fast",
            power_backup="Solar",
            teachers_using_ict=18,
            total_teachers=20,
            weekly_computer_lab_hours=20,
            student_digital_literacy_rate=80,
            ict_trained_teachers=18,
            support_staff=2,
        ),
        make_report(
            "SCH2",
            "2024-02-01T08:30:00Z",
            report_id="RPT3",
            period="Term 1 2024",
            computers=10,
            functional_devices=4,
            internet_connection="None",
            teachers_using_ict=2,
            total_teachers=15,
            weekly_computer_lab_hours=2,
            student_digital_literacy_rate=10,
            ict_trained_teachers=1,
        ),
        make_report(
            "SCH3",
            "2024-03-20T09:00:00Z",
            report_id="RPT4",
            period="Term 1 2024",
            computers=60,
            functional_devices=50,
            internet_connection="Slow",
            power_backup=True,
            teachers_using_ict=12,
            total_teachers=30,
            weekly_computer_lab_hours=8,
            student_digital_literacy_rate=35,
            ict_trained_teachers=10,
        ),
        make_report(
            "SCH5",
            "2024-05-05T09:00:00Z",
            report_id="RPT5",
            period="Term 2 2024",
            computers=25,
            functional_devices=20,
            internet_connection="Fiber",
            teachers_using_ict=6,
            total_teachers=12,
            weekly_computer_lab_hours=5,
            student_digital_literacy_rate=50,
            ict_trained_teachers=6,
            support_staff=1,
        ),
    ]


def _school_record(school: School) -> SchoolRecord:
    return SchoolRecord(id=school.id, **school.model_dump(exclude={"id"}))


def _report_record(report: ICTReport) -> ICTReportRecord:
    return ICTReportRecord(
        id=report.id,
        school_id=report.school_id,
        period=report.period,
        date=report.date,
        infrastructure=report.infrastructure.model_dump(),
        usage=report.usage.model_dump(),
        capacity=report.capacity.model_dump(),
        software=report.software.model_dump(),
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def test_schools() -> list[School]:
    return create_test_schools()


@pytest.fixture()
def test_reports() -> list[ICTReport]:
    return create_test_reports()


@pytest.fixture()
def db_path(tmp_path) -> str:
    """Create a temporary SQLite database seeded with test data and return its path."""
    path = str(tmp_path / "test_ict.db")
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)

    with Session(sync_engine) as session:
        session.add_all([_school_record(s) for s in create_test_schools()])
        session.flush()
        session.add_all([_report_record(r) for r in create_test_reports()])
        session.commit()

    sync_engine.dispose()
    return path


@pytest.fixture()
def test_repo(db_path) -> SQLiteSchoolRepository:
    """Return an async :class:`SQLiteSchoolRepository` backed by the test database."""
    return SQLiteSchoolRepository(db_path)


@pytest.fixture()
def test_client(db_path) -> TestClient:
    """Return a FastAPI ``TestClient`` wired to the test database."""
    repo = SQLiteSchoolRepository(db_path)

    def _override() -> SchoolRepository:
        return repo

    app.dependency_overrides[get_school_repository] = _override

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
