"""Observation assessment: per-area verdicts and prioritised action items.

Feeds the printable observation report.  The overall readiness row uses the
same rubric as :mod:`src.services.readiness`, so the printed figure always
matches the dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.schemas.report import ICTReport
from src.services.readiness import MAX_SCORE, calculate_readiness, safe_ratio
from src.services.trends import NO_INTERNET, observation_summary

GOOD_LAB_HOURS = 10.0
GOOD_LITERACY_RATE = 60.0
LOW_LITERACY_RATE = 50.0
LOW_TEACHER_USAGE_RATIO = 0.5
MIN_FUNCTIONAL_DEVICES = 10

LEVEL_RECOMMENDATIONS: dict[str, str] = {
    "High": "Maintain current standards",
    "Medium": "Focus on teacher training and device maintenance",
    "Low": "Urgent need for infrastructure improvement and teacher training",
}


@dataclass(frozen=True)
class MetricRow:
    metric: str
    value: str
    assessment: str


@dataclass(frozen=True)
class AssessmentRow:
    area: str
    status: str
    recommendation: str


@dataclass(frozen=True)
class ActionItem:
    priority: str  # High Priority / Medium Priority / Low Priority
    category: str
    action: str
    timeline: str


@dataclass(frozen=True)
class ReportAssessment:
    readiness_level: str
    readiness_score: int
    teaching_metrics: list[MetricRow]
    observations: list[AssessmentRow]
    action_items: list[ActionItem]


def _verdict(ok: bool) -> str:
    return "Good" if ok else "Needs Improvement"


def _teaching_metrics(report: ICTReport) -> list[MetricRow]:
    usage = report.usage
    capacity = report.capacity
    summary = observation_summary(report)
    return [
        MetricRow(
            "Teachers Using ICT",
            f"{usage.teachers_using_ict} of {usage.total_teachers}",
            f"{summary.teacher_usage_percent}%",
        ),
        MetricRow(
            "Weekly Computer Lab Hours",
            f"{usage.weekly_computer_lab_hours:g}",
            _verdict(usage.weekly_computer_lab_hours >= GOOD_LAB_HOURS),
        ),
        MetricRow(
            "Student Digital Literacy Rate",
            f"{usage.student_digital_literacy_rate:g}%",
            _verdict(usage.student_digital_literacy_rate >= GOOD_LITERACY_RATE),
        ),
        MetricRow(
            "ICT-Trained Teachers",
            f"{capacity.ict_trained_teachers} of {usage.total_teachers}",
            f"{summary.trained_teachers_percent}%",
        ),
        MetricRow(
            "Support Staff",
            str(capacity.support_staff),
            "Available" if capacity.support_staff > 0 else "Not Available",
        ),
    ]


def _observations(report: ICTReport, level: str, score: int) -> list[AssessmentRow]:
    infra = report.infrastructure
    usage = report.usage
    summary = observation_summary(report)
    usage_ratio = safe_ratio(usage.teachers_using_ict, usage.total_teachers)

    return [
        AssessmentRow("Overall ICT Readiness", f"{score}/{MAX_SCORE} ({level})", LEVEL_RECOMMENDATIONS[level]),
        AssessmentRow(
            "Infrastructure Status",
            f"{infra.functional_devices} functional devices",
            "Increase device availability"
            if infra.functional_devices < MIN_FUNCTIONAL_DEVICES
            else "Maintain current equipment",
        ),
        AssessmentRow(
            "Teacher ICT Usage",
            f"{summary.teacher_usage_percent}%",
            "Increase teacher training and support"
            if usage_ratio < LOW_TEACHER_USAGE_RATIO
            else "Continue current training programs",
        ),
        AssessmentRow(
            "Student Digital Literacy",
            f"{usage.student_digital_literacy_rate:g}%",
            "Implement structured digital literacy program"
            if usage.student_digital_literacy_rate < LOW_LITERACY_RATE
            else "Expand current programs",
        ),
        AssessmentRow(
            "Internet Connectivity",
            infra.internet_connection,
            "Establish internet connection"
            if infra.internet_connection == NO_INTERNET
            else "Maintain and improve connection stability",
        ),
    ]


def action_items(report: ICTReport) -> list[ActionItem]:
    """Return the follow-up actions a report calls for, most urgent first."""
    infra = report.infrastructure
    usage = report.usage
    items: list[ActionItem] = []

    if infra.functional_devices < MIN_FUNCTIONAL_DEVICES:
        items.append(
            ActionItem("High Priority", "Infrastructure", "Repair or replace non-functional devices", "30 days")
        )
    if safe_ratio(usage.teachers_using_ict, usage.total_teachers) < LOW_TEACHER_USAGE_RATIO:
        items.append(ActionItem("High Priority", "Training", "Conduct teacher ICT training workshop", "60 days"))
    if infra.internet_connection == NO_INTERNET:
        items.append(ActionItem("Medium Priority", "Connectivity", "Establish internet connection", "90 days"))
    if usage.student_digital_literacy_rate < LOW_LITERACY_RATE:
        items.append(ActionItem("Medium Priority", "Curriculum", "Implement digital literacy program", "120 days"))
    if report.capacity.support_staff == 0:
        items.append(ActionItem("Low Priority", "Staffing", "Assign ICT support staff", "180 days"))

    return items


def assess_report(report: ICTReport) -> ReportAssessment:
    """Assess a single observation report."""
    readiness = calculate_readiness([report])
    return ReportAssessment(
        readiness_level=readiness.level,
        readiness_score=readiness.score,
        teaching_metrics=_teaching_metrics(report),
        observations=_observations(report, readiness.level, readiness.score),
        action_items=action_items(report),
    )
