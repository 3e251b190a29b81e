"""Observation report endpoints: submission, edits and the printable assessment."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from src.db.base import SchoolRepository
from src.db.factory import get_school_repository
from src.schemas.analytics import (
    ActionItemResponse,
    AssessmentRowResponse,
    MetricRowResponse,
    ReportAssessmentResponse,
)
from src.schemas.report import ICTReport
from src.services.assessment import assess_report
from src.services.reports import parse_report_date

router = APIRouter(tags=["reports"])


async def _validate_report(repo: SchoolRepository, report: ICTReport) -> None:
    """Reject reports for unknown schools or with an unparseable date."""
    if await repo.get_school(report.school_id) is None:
        raise HTTPException(status_code=404, detail=f"School {report.school_id!r} not found")
    # Raises MalformedDateError, mapped to 422 by the app
    parse_report_date(report.date, report.id)


async def _require_report(repo: SchoolRepository, report_id: str) -> ICTReport:
    report = await repo.get_report(report_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.post("/api/reports", response_model=ICTReport, status_code=201)
async def create_report(
    report: ICTReport,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> ICTReport:
    """Submit a periodic observation for a school."""
    await _validate_report(repo, report)
    return await repo.create_report(report)


@router.get("/api/reports/{report_id}", response_model=ICTReport)
async def get_report(
    report_id: str,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> ICTReport:
    return await _require_report(repo, report_id)


@router.put("/api/reports/{report_id}", response_model=ICTReport)
async def update_report(
    report_id: str,
    report: ICTReport,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> ICTReport:
    """Re-submit an observation, replacing its contents.

    A body ``id`` must match the path; omit it to keep the stored id.
    """
    if report.id is not None and report.id != report_id:
        raise HTTPException(status_code=422, detail=f"Report id {report.id!r} does not match path id {report_id!r}")
    await _validate_report(repo, report)
    updated = await repo.update_report(report_id, report)
    if updated is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return updated


@router.delete("/api/reports/{report_id}", status_code=204)
async def delete_report(
    report_id: str,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> Response:
    if not await repo.delete_report(report_id):
        raise HTTPException(status_code=404, detail="Report not found")
    return Response(status_code=204)


@router.get("/api/reports/{report_id}/assessment", response_model=ReportAssessmentResponse)
async def get_report_assessment(
    report_id: str,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> ReportAssessmentResponse:
    """Area-by-area assessment and action items for one observation."""
    report = await _require_report(repo, report_id)
    assessment = assess_report(report)
    return ReportAssessmentResponse(
        report_id=report.id,
        school_id=report.school_id,
        period=report.period,
        readiness_level=assessment.readiness_level,
        readiness_score=assessment.readiness_score,
        teaching_metrics=[MetricRowResponse.model_validate(m) for m in assessment.teaching_metrics],
        observations=[AssessmentRowResponse.model_validate(o) for o in assessment.observations],
        action_items=[ActionItemResponse.model_validate(a) for a in assessment.action_items],
    )
