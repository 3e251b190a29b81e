"""Export API endpoints for generating downloadable files."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from src.api.schools import to_list_filters
from src.db.base import SchoolRepository
from src.db.factory import get_school_repository
from src.schemas.filters import SchoolListParams
from src.services.export import export_filename, schools_csv
from src.services.filters import filter_schools

router = APIRouter(tags=["export"])


@router.get("/api/export/schools.csv")
async def export_schools_csv(
    params: Annotated[SchoolListParams, Query()],
    repo: Annotated[SchoolRepository, Depends(get_school_repository)],
) -> Response:
    """Export every school matching the list filters as CSV (pagination ignored)."""
    schools = await repo.list_schools()
    reports = await repo.list_reports()
    rows = filter_schools(schools, reports, to_list_filters(params))

    return Response(
        content=schools_csv(rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={export_filename()}"},
    )
