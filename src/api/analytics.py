from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from src.config import get_settings
from src.db.base import SchoolRepository
from src.db.factory import get_school_repository
from src.schemas.analytics import FleetSummaryResponse
from src.services.fleet import calculate_fleet_summary
from src.services.regions import list_regions

router = APIRouter(tags=["analytics"])


@router.get("/api/analytics/summary", response_model=FleetSummaryResponse)
async def fleet_summary(
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> FleetSummaryResponse:
    """Internet coverage, device averages, top schools and distributions."""
    schools = await repo.list_schools()
    reports = await repo.list_reports()
    summary = calculate_fleet_summary(schools, reports, top_n=get_settings().TOP_SCHOOLS_LIMIT)
    return FleetSummaryResponse.model_validate(summary)


@router.get("/api/districts", response_model=list[str])
async def list_districts(
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> list[str]:
    """Return all distinct districts in the database."""
    return await repo.list_districts()


@router.get("/api/regions", response_model=list[str])
async def regions() -> list[str]:
    return list_regions()
