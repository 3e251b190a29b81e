from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import delete, literal_column, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.db.base import DuplicateIdError, SchoolRepository
from src.db.models import Base, ICTReportRecord, SchoolRecord
from src.schemas.report import ICTReport
from src.schemas.school import School, SchoolInput

logger = logging.getLogger(__name__)

_METRIC_GROUPS = ("infrastructure", "usage", "capacity", "software")


def generate_id(prefix: str) -> str:
    """Return a new identifier such as ``SCH1A2B3C4D5E``."""
    return f"{prefix}{uuid.uuid4().hex[:10].upper()}"


# ---------------------------------------------------------------------------
# Row <-> schema conversion
# ---------------------------------------------------------------------------


def _school_from_record(row: SchoolRecord) -> School:
    return School.model_validate({col.key: getattr(row, col.key) for col in SchoolRecord.__table__.columns})


def _report_from_record(row: ICTReportRecord) -> ICTReport:
    return ICTReport.model_validate({col.key: getattr(row, col.key) for col in ICTReportRecord.__table__.columns})


def _report_columns(report: ICTReport) -> dict[str, Any]:
    columns: dict[str, Any] = {
        "school_id": report.school_id,
        "period": report.period,
        "date": report.date,
    }
    for group in _METRIC_GROUPS:
        columns[group] = getattr(report, group).model_dump()
    return columns


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class SQLiteSchoolRepository(SchoolRepository):
    """SQLite-backed implementation of :class:`SchoolRepository`.

    Uses *aiosqlite* via SQLAlchemy's async engine.  Metric groups of a
    report are stored as JSON columns and re-validated into
    :class:`~src.schemas.report.ICTReport` on the way out.
    """

    def __init__(self, sqlite_path: str = "./data/ict_observatory.db") -> None:
        url = f"sqlite+aiosqlite:///{sqlite_path}"
        self._engine = create_async_engine(url, echo=False)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self._engine, expire_on_commit=False
        )

    @property
    def engine(self) -> AsyncEngine:
        """Expose the underlying async engine (used by the application lifespan)."""
        return self._engine

    async def init_db(self) -> None:
        """Create all tables if they do not already exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # ------------------------------------------------------------------
    # Schools
    # ------------------------------------------------------------------

    async def list_schools(self) -> list[School]:
        stmt = select(SchoolRecord).order_by(SchoolRecord.name)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [_school_from_record(row) for row in result.scalars().all()]

    async def get_school(self, school_id: str) -> School | None:
        async with self._session_factory() as session:
            row = await session.get(SchoolRecord, school_id)
            return _school_from_record(row) if row is not None else None

    async def create_school(self, payload: SchoolInput, school_id: str | None = None) -> School:
        school_id = school_id or generate_id("SCH")
        row = SchoolRecord(id=school_id, **payload.model_dump())
        async with self._session_factory() as session:
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                raise DuplicateIdError("School", school_id) from exc
            logger.info("Registered school %r (id=%s)", row.name, row.id)
            return _school_from_record(row)

    async def update_school(self, school_id: str, payload: SchoolInput) -> School | None:
        async with self._session_factory() as session:
            row = await session.get(SchoolRecord, school_id)
            if row is None:
                return None
            for key, value in payload.model_dump().items():
                setattr(row, key, value)
            await session.commit()
            return _school_from_record(row)

    async def delete_school(self, school_id: str) -> bool:
        async with self._session_factory() as session:
            row = await session.get(SchoolRecord, school_id)
            if row is None:
                return False
            result = await session.execute(delete(ICTReportRecord).where(ICTReportRecord.school_id == school_id))
            await session.delete(row)
            await session.commit()
            logger.info("Deleted school id=%s and %d report(s)", school_id, result.rowcount)
            return True

    async def list_districts(self) -> list[str]:
        stmt = (
            select(SchoolRecord.district).where(SchoolRecord.district != "").distinct().order_by(SchoolRecord.district)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [r[0] for r in result.all()]

    # ------------------------------------------------------------------
    # Observation reports
    # ------------------------------------------------------------------

    async def list_reports(self, school_id: str | None = None) -> list[ICTReport]:
        stmt = select(ICTReportRecord)
        if school_id is not None:
            stmt = stmt.where(ICTReportRecord.school_id == school_id)
        # rowid keeps submission order, which decides ties between equal dates
        stmt = stmt.order_by(literal_column("ict_reports.rowid"))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [_report_from_record(row) for row in result.scalars().all()]

    async def get_report(self, report_id: str) -> ICTReport | None:
        async with self._session_factory() as session:
            row = await session.get(ICTReportRecord, report_id)
            return _report_from_record(row) if row is not None else None

    async def create_report(self, report: ICTReport) -> ICTReport:
        report_id = report.id or generate_id("RPT")
        row = ICTReportRecord(id=report_id, **_report_columns(report))
        async with self._session_factory() as session:
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                raise DuplicateIdError("Report", report_id) from exc
            logger.info("Stored report %s for school %s (%s)", row.id, row.school_id, row.period)
            return _report_from_record(row)

    async def update_report(self, report_id: str, report: ICTReport) -> ICTReport | None:
        async with self._session_factory() as session:
            row = await session.get(ICTReportRecord, report_id)
            if row is None:
                return None
            for key, value in _report_columns(report).items():
                setattr(row, key, value)
            await session.commit()
            return _report_from_record(row)

    async def delete_report(self, report_id: str) -> bool:
        async with self._session_factory() as session:
            row = await session.get(ICTReportRecord, report_id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
            return True
