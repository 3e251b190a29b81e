"""Fleet-wide ICT statistics across every registered school."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from src.schemas.report import ICTReport
from src.schemas.school import School
from src.services.readiness import calculate_readiness
from src.services.reports import group_reports_by_school, latest_of
from src.services.trends import NO_INTERNET

logger = logging.getLogger(__name__)

DEFAULT_TOP_SCHOOLS = 5

# Stored environments are capitalised ("Urban" / "Rural"), so only the
# lowercase literal counts as urban here; see DESIGN.md.
URBAN_ENVIRONMENT = "urban"


@dataclass(frozen=True)
class RankedSchool:
    school_id: str
    name: str
    score: int
    level: str


@dataclass(frozen=True)
class FleetSummary:
    """Aggregate readiness statistics for a set of schools."""

    total_schools: int
    schools_with_internet: int
    schools_with_internet_percent: float
    average_computers: float
    top_schools: list[RankedSchool]
    district_distribution: dict[str, int]
    environment_distribution: dict[str, int]


def calculate_fleet_summary(
    schools: Sequence[School],
    reports: Sequence[ICTReport],
    top_n: int = DEFAULT_TOP_SCHOOLS,
) -> FleetSummary:
    """Summarise the fleet from each school's latest report and full history.

    * Internet access counts schools whose latest report has a connection
      other than ``"None"``; schools without reports count as offline.
    * ``average_computers`` divides by every school, including those with no
      reports.
    * ``top_schools`` is ordered by score; ties keep the order of *schools*.

    Raises:
        MalformedDateError: If a report date cannot be parsed.
    """
    by_school = group_reports_by_school(reports)

    with_internet = 0
    total_computers = 0
    ranked: list[RankedSchool] = []
    districts: Counter[str] = Counter()
    environments = {"urban": 0, "rural": 0}

    for school in schools:
        history = by_school.get(school.id, [])
        latest = latest_of(history)

        if latest is not None:
            if latest.infrastructure.internet_connection != NO_INTERNET:
                with_internet += 1
            total_computers += latest.infrastructure.computers

        readiness = calculate_readiness(history)
        ranked.append(RankedSchool(school_id=school.id, name=school.name, score=readiness.score, level=readiness.level))

        districts[school.district] += 1

        if school.environment == URBAN_ENVIRONMENT:
            environments["urban"] += 1
        else:
            environments["rural"] += 1

    total = len(schools)
    top = sorted(ranked, key=lambda r: r.score, reverse=True)[:top_n]

    summary = FleetSummary(
        total_schools=total,
        schools_with_internet=with_internet,
        schools_with_internet_percent=with_internet / total * 100 if total else 0.0,
        average_computers=total_computers / total if total else 0.0,
        top_schools=top,
        district_distribution=dict(districts),
        environment_distribution=environments,
    )
    logger.debug("Computed fleet summary for %d schools from %d reports", total, len(reports))
    return summary
