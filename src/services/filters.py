"""Filtering and pagination for the school list.

Filters run in memory over the school and report collections returned by the
repository, because the readiness level and latest-report date they depend on
are computed rather than stored.

The filter types handled are:
  * free-text search over name, district, sub-county and head teacher
  * district (exact)
  * region (derived from district)
  * environment (exact, as stored)
  * readiness level
  * latest-report date window
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from src.schemas.report import ICTReport
from src.schemas.school import School
from src.services.readiness import ReadinessResult, calculate_readiness
from src.services.regions import get_region
from src.services.reports import group_reports_by_school, latest_of, parse_report_date

T = TypeVar("T")


@dataclass
class SchoolListFilters:
    """Criteria for narrowing down the school list.

    All fields are optional.  When a field is ``None`` the corresponding
    filter is not applied.
    """

    search: str | None = None
    district: str | None = None
    region: str | None = None
    environment: str | None = None
    readiness_level: str | None = None  # Low / Medium / High
    date_from: datetime.date | None = None  # inclusive, compared with the latest report date
    date_to: datetime.date | None = None  # inclusive


@dataclass(frozen=True)
class SchoolReadinessRow:
    """A school together with its region, readiness and last report date."""

    school: School
    region: str
    readiness: ReadinessResult
    last_report_date: str | None


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int


def school_readiness_row(school: School, history: Sequence[ICTReport]) -> SchoolReadinessRow:
    """Build the list row for *school* from its own reports."""
    latest = latest_of(history)
    return SchoolReadinessRow(
        school=school,
        region=get_region(school.district),
        readiness=calculate_readiness(history),
        last_report_date=latest.date if latest is not None else None,
    )


def _matches_search(school: School, term: str) -> bool:
    needle = term.lower()
    haystacks = (school.name, school.district, school.sub_county, school.head_teacher_name)
    return any(h and needle in h.lower() for h in haystacks)


def _in_date_window(row: SchoolReadinessRow, filters: SchoolListFilters) -> bool:
    if row.last_report_date is None:
        return False
    reported_on = parse_report_date(row.last_report_date).date()
    if filters.date_from is not None and reported_on < filters.date_from:
        return False
    if filters.date_to is not None and reported_on > filters.date_to:
        return False
    return True


def filter_schools(
    schools: Sequence[School],
    reports: Sequence[ICTReport],
    filters: SchoolListFilters,
) -> list[SchoolReadinessRow]:
    """Return readiness rows for the schools that pass *filters*, in input order.

    Schools without any report are excluded whenever a date bound is set.
    """
    by_school = group_reports_by_school(reports)
    rows: list[SchoolReadinessRow] = []

    for school in schools:
        if filters.search and not _matches_search(school, filters.search):
            continue
        if filters.district is not None and school.district != filters.district:
            continue
        if filters.environment is not None and school.environment != filters.environment:
            continue

        row = school_readiness_row(school, by_school.get(school.id, []))

        if filters.region is not None and row.region != filters.region:
            continue
        if filters.readiness_level is not None and row.readiness.level != filters.readiness_level:
            continue
        if (filters.date_from is not None or filters.date_to is not None) and not _in_date_window(row, filters):
            continue

        rows.append(row)

    return rows


def paginate(items: Sequence[T], page: int = 1, page_size: int = 25) -> Page[T]:
    """Slice *items* into a 1-based page.  Pages past the end are empty."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        total=len(items),
        page=page,
        page_size=page_size,
        total_pages=math.ceil(len(items) / page_size),
    )
