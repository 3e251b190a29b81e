"""ICT readiness scoring.

Converts the metrics of a school's most recent observation into a point score
and a Low / Medium / High classification.  Seven capped terms contribute:

    ======================  ====  =========================================
    term                    cap   rule
    ======================  ====  =========================================
    devices                 15    computers / 100 * 15
    internet                10    Fast 10, Medium 7, Slow 3, otherwise 0
    power_backup             5    5 when a backup indicator is present
    teacher_usage           10    teachers_using_ict / total_teachers * 10
    lab_hours                5    weekly_computer_lab_hours / 10
    literacy                10    student_digital_literacy_rate / 10
    training                15    ict_trained_teachers / total_teachers * 15
    ======================  ====  =========================================

The caps add up to 70, not 100.  Scores are reported on that 0-70 range and
classified against fixed thresholds (30 and 60); they are not rescaled.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from src.schemas.report import ICTReport
from src.services.reports import latest_of

ReadinessLevel = Literal["Low", "Medium", "High"]

# ---------------------------------------------------------------------------
# Rubric
# ---------------------------------------------------------------------------

REFERENCE_COMPUTERS = 100  # device count treated as the ideal
MAX_DEVICE_POINTS = 15
INTERNET_POINTS: dict[str, int] = {
    "Fast": 10,
    "Medium": 7,
    "Slow": 3,
}
POWER_BACKUP_POINTS = 5
MAX_TEACHER_USAGE_POINTS = 10
MAX_LAB_HOURS_POINTS = 5
MAX_LITERACY_POINTS = 10
MAX_TRAINING_POINTS = 15

COMPONENT_CAPS: dict[str, int] = {
    "devices": MAX_DEVICE_POINTS,
    "internet": max(INTERNET_POINTS.values()),
    "power_backup": POWER_BACKUP_POINTS,
    "teacher_usage": MAX_TEACHER_USAGE_POINTS,
    "lab_hours": MAX_LAB_HOURS_POINTS,
    "literacy": MAX_LITERACY_POINTS,
    "training": MAX_TRAINING_POINTS,
}
MAX_SCORE = sum(COMPONENT_CAPS.values())

MEDIUM_THRESHOLD = 30
HIGH_THRESHOLD = 60


@dataclass(frozen=True)
class ReadinessResult:
    """Score and level for a school (or a single report)."""

    level: ReadinessLevel
    score: int


EMPTY_READINESS = ReadinessResult(level="Low", score=0)


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (13.5 -> 14).

    Non-finite input rounds to 0.
    """
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or 0.0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def _capped(value: float, cap: int) -> int:
    return max(0, min(cap, round_half_up(value)))


def has_power_backup(indicator: bool | str | list[str] | None) -> bool:
    """Whether a power-backup indicator (flag, source string or list) is set."""
    if isinstance(indicator, str):
        return bool(indicator.strip())
    return bool(indicator)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def readiness_components(report: ICTReport) -> dict[str, int]:
    """Return the seven rubric terms for a single report."""
    infra = report.infrastructure
    usage = report.usage
    capacity = report.capacity

    return {
        "devices": _capped(infra.computers / REFERENCE_COMPUTERS * MAX_DEVICE_POINTS, MAX_DEVICE_POINTS),
        "internet": INTERNET_POINTS.get(infra.internet_connection, 0),
        "power_backup": POWER_BACKUP_POINTS if has_power_backup(infra.power_backup) else 0,
        "teacher_usage": _capped(
            safe_ratio(usage.teachers_using_ict, usage.total_teachers) * MAX_TEACHER_USAGE_POINTS,
            MAX_TEACHER_USAGE_POINTS,
        ),
        "lab_hours": _capped(usage.weekly_computer_lab_hours / 10, MAX_LAB_HOURS_POINTS),
        "literacy": _capped(usage.student_digital_literacy_rate / 10, MAX_LITERACY_POINTS),
        "training": _capped(
            safe_ratio(capacity.ict_trained_teachers, usage.total_teachers) * MAX_TRAINING_POINTS,
            MAX_TRAINING_POINTS,
        ),
    }


def classify_score(score: int) -> ReadinessLevel:
    """Map a score to its readiness level."""
    if score < MEDIUM_THRESHOLD:
        return "Low"
    if score < HIGH_THRESHOLD:
        return "Medium"
    return "High"


def calculate_readiness(reports: Iterable[ICTReport]) -> ReadinessResult:
    """Score a school from its reports.

    Only the most recent report (by date) contributes.  An empty collection
    is the zero-data baseline ``Low / 0``.

    Raises:
        MalformedDateError: If a report date cannot be parsed.
    """
    latest = latest_of(reports)
    if latest is None:
        return EMPTY_READINESS

    score = sum(readiness_components(latest).values())
    return ReadinessResult(level=classify_score(score), score=score)
