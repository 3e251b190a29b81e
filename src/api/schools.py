from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from src.config import get_settings
from src.db.base import SchoolRepository
from src.db.factory import get_school_repository
from src.schemas.analytics import (
    GrowthDeltasResponse,
    ObservationSummaryResponse,
    SchoolDetailResponse,
    TrendPointResponse,
    TrendResponse,
)
from src.schemas.filters import SchoolListParams
from src.schemas.report import ICTReport
from src.schemas.school import (
    ReadinessResponse,
    School,
    SchoolInput,
    SchoolListItemResponse,
    SchoolPageResponse,
)
from src.services.filters import SchoolListFilters, SchoolReadinessRow, filter_schools, paginate
from src.services.readiness import calculate_readiness
from src.services.reports import latest_of, sort_reports_by_date
from src.services.trends import build_trend, observation_summary

router = APIRouter(tags=["schools"])


def to_list_filters(params: SchoolListParams) -> SchoolListFilters:
    """Convert API query params to the service's filter dataclass."""
    return SchoolListFilters(
        search=params.search,
        district=params.district,
        region=params.region,
        environment=params.environment,
        readiness_level=params.readiness_level,
        date_from=params.date_from,
        date_to=params.date_to,
    )


def _row_to_response(row: SchoolReadinessRow) -> SchoolListItemResponse:
    return SchoolListItemResponse(
        school=row.school,
        region=row.region,
        readiness=ReadinessResponse(level=row.readiness.level, score=row.readiness.score),
        last_report_date=row.last_report_date,
    )


async def _require_school(repo: SchoolRepository, school_id: str) -> School:
    school = await repo.get_school(school_id)
    if school is None:
        raise HTTPException(status_code=404, detail="School not found")
    return school


@router.get("/api/schools", response_model=SchoolPageResponse)
async def list_schools(
    params: Annotated[SchoolListParams, Query()],
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> SchoolPageResponse:
    """List schools with readiness, filtered and paginated."""
    schools = await repo.list_schools()
    reports = await repo.list_reports()
    rows = filter_schools(schools, reports, to_list_filters(params))

    page = paginate(rows, page=params.page, page_size=params.page_size or get_settings().SCHOOLS_PAGE_SIZE)
    return SchoolPageResponse(
        data=[_row_to_response(r) for r in page.items],
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
    )


@router.get("/api/schools/{school_id}", response_model=SchoolDetailResponse)
async def get_school(
    school_id: str,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> SchoolDetailResponse:
    """Get a school with its current readiness and latest observation."""
    school = await _require_school(repo, school_id)
    reports = await repo.list_reports(school_id)

    readiness = calculate_readiness(reports)
    latest = latest_of(reports)
    return SchoolDetailResponse(
        school=school,
        readiness=ReadinessResponse(level=readiness.level, score=readiness.score),
        latest_report=latest,
        latest_summary=ObservationSummaryResponse.model_validate(observation_summary(latest)) if latest else None,
        report_count=len(reports),
    )


@router.post("/api/schools", response_model=School, status_code=201)
async def create_school(
    payload: SchoolInput,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> School:
    """Register a new school."""
    return await repo.create_school(payload)


@router.put("/api/schools/{school_id}", response_model=School)
async def update_school(
    school_id: str,
    payload: SchoolInput,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> School:
    """Replace a school's profile."""
    school = await repo.update_school(school_id, payload)
    if school is None:
        raise HTTPException(status_code=404, detail="School not found")
    return school


@router.delete("/api/schools/{school_id}", status_code=204)
async def delete_school(
    school_id: str,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> Response:
    """Delete a school together with all of its observation reports."""
    if not await repo.delete_school(school_id):
        raise HTTPException(status_code=404, detail="School not found")
    return Response(status_code=204)


@router.get("/api/schools/{school_id}/reports", response_model=list[ICTReport])
async def list_school_reports(
    school_id: str,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
    period: Annotated[str | None, Query(description="Only reports with this period label")] = None,
) -> list[ICTReport]:
    """List a school's observations, newest first."""
    await _require_school(repo, school_id)
    reports = await repo.list_reports(school_id)
    if period:
        reports = [r for r in reports if r.period == period]
    return list(reversed(sort_reports_by_date(reports)))


@router.get("/api/schools/{school_id}/trend", response_model=TrendResponse)
async def get_school_trend(
    school_id: str,
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> TrendResponse:
    """Per-period readiness series and growth since the first observation."""
    await _require_school(repo, school_id)
    trend = build_trend(await repo.list_reports(school_id))
    return TrendResponse(
        school_id=school_id,
        series=[TrendPointResponse.model_validate(p) for p in trend.series],
        deltas=GrowthDeltasResponse.model_validate(trend.deltas) if trend.deltas else None,
    )
