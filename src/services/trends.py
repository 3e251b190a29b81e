"""Per-period readiness trend and first-vs-latest growth for one school."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from src.schemas.report import ICTReport
from src.services.readiness import calculate_readiness, has_power_backup, round_half_up, safe_ratio
from src.services.reports import sort_reports_by_date

NO_INTERNET = "None"


@dataclass(frozen=True)
class ObservationSummary:
    """Derived figures for a single report, as shown next to each observation."""

    teacher_usage_percent: int
    trained_teachers_percent: int
    device_utilization: int
    has_internet: bool
    has_power_backup: bool
    functional_devices: int
    student_literacy: float
    weekly_lab_hours: float
    readiness_score: int
    readiness_level: str


@dataclass(frozen=True)
class TrendPoint:
    """One period of a school's trend series."""

    report_id: str | None
    period: str
    date: str
    computers: int
    tablets: int
    projectors: int
    printers: int
    functional_devices: int
    internet_speed_mbps: float
    weekly_lab_hours: float
    student_literacy: float
    teacher_usage_percent: int
    trained_teachers_percent: int
    device_utilization: int
    has_internet: bool
    has_power_backup: bool
    readiness_score: int
    readiness_level: str


@dataclass(frozen=True)
class GrowthDeltas:
    """Latest-minus-earliest change across a school's observations."""

    device_growth: int
    teacher_usage_growth: int
    literacy_growth: float
    readiness_growth: int


@dataclass(frozen=True)
class TrendResult:
    series: list[TrendPoint]
    deltas: GrowthDeltas | None


def observation_summary(report: ICTReport) -> ObservationSummary:
    """Compute the percentage conventions and readiness for one report.

    Every ratio is 0 when its denominator is 0.
    """
    infra = report.infrastructure
    usage = report.usage
    readiness = calculate_readiness([report])

    return ObservationSummary(
        teacher_usage_percent=round_half_up(safe_ratio(usage.teachers_using_ict, usage.total_teachers) * 100),
        trained_teachers_percent=round_half_up(
            safe_ratio(report.capacity.ict_trained_teachers, usage.total_teachers) * 100
        ),
        device_utilization=round_half_up(safe_ratio(infra.functional_devices, infra.computers + infra.tablets) * 100),
        has_internet=infra.internet_connection != NO_INTERNET,
        has_power_backup=has_power_backup(infra.power_backup),
        functional_devices=infra.functional_devices,
        student_literacy=usage.student_digital_literacy_rate,
        weekly_lab_hours=usage.weekly_computer_lab_hours,
        readiness_score=readiness.score,
        readiness_level=readiness.level,
    )


def _trend_point(report: ICTReport) -> TrendPoint:
    infra = report.infrastructure
    summary = observation_summary(report)
    return TrendPoint(
        report_id=report.id,
        period=report.period,
        date=report.date,
        computers=infra.computers,
        tablets=infra.tablets,
        projectors=infra.projectors,
        printers=infra.printers,
        functional_devices=infra.functional_devices,
        internet_speed_mbps=infra.internet_speed_mbps,
        weekly_lab_hours=summary.weekly_lab_hours,
        student_literacy=summary.student_literacy,
        teacher_usage_percent=summary.teacher_usage_percent,
        trained_teachers_percent=summary.trained_teachers_percent,
        device_utilization=summary.device_utilization,
        has_internet=summary.has_internet,
        has_power_backup=summary.has_power_backup,
        readiness_score=summary.readiness_score,
        readiness_level=summary.readiness_level,
    )


def calculate_growth(earliest: ICTReport, latest: ICTReport) -> GrowthDeltas:
    """Return ``latest - earliest`` for the tracked metrics (sign preserved)."""
    first = observation_summary(earliest)
    last = observation_summary(latest)
    return GrowthDeltas(
        device_growth=last.functional_devices - first.functional_devices,
        teacher_usage_growth=last.teacher_usage_percent - first.teacher_usage_percent,
        literacy_growth=last.student_literacy - first.student_literacy,
        readiness_growth=last.readiness_score - first.readiness_score,
    )


def build_trend(reports: Iterable[ICTReport]) -> TrendResult:
    """Build the trend series and growth deltas for one school's reports.

    Each point is scored on its own report only.  The series is in
    chronological order.  Deltas need at least two observations and are
    ``None`` otherwise.

    Raises:
        MalformedDateError: If a report date cannot be parsed.
    """
    ordered = sort_reports_by_date(reports)
    series = [_trend_point(r) for r in ordered]
    deltas = calculate_growth(ordered[0], ordered[-1]) if len(ordered) >= 2 else None
    return TrendResult(series=series, deltas=deltas)
