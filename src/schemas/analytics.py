"""Pydantic schemas for readiness, trend, fleet and assessment endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from src.schemas.report import ICTReport
from src.schemas.school import ReadinessResponse, School


class ObservationSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class SchoolDetailResponse(BaseModel):
    """A school with its current readiness and latest observation."""

    school: School
    readiness: ReadinessResponse
    latest_report: ICTReport | None = None
    latest_summary: ObservationSummaryResponse | None = None
    report_count: int


class TrendPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    report_id: str | None = None
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


class GrowthDeltasResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    device_growth: int
    teacher_usage_growth: int
    literacy_growth: float
    readiness_growth: int


class TrendResponse(BaseModel):
    """Per-period readiness series and first-vs-latest growth for a school."""

    model_config = ConfigDict(from_attributes=True)

    school_id: str
    series: list[TrendPointResponse]
    deltas: GrowthDeltasResponse | None = None


class RankedSchoolResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    school_id: str
    name: str
    score: int
    level: str


class FleetSummaryResponse(BaseModel):
    """Aggregate statistics across every registered school."""

    model_config = ConfigDict(from_attributes=True)

    total_schools: int
    schools_with_internet: int
    schools_with_internet_percent: float
    average_computers: float
    top_schools: list[RankedSchoolResponse]
    district_distribution: dict[str, int]
    environment_distribution: dict[str, int]


class MetricRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    metric: str
    value: str
    assessment: str


class AssessmentRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    area: str
    status: str
    recommendation: str


class ActionItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    priority: str
    category: str
    action: str
    timeline: str


class ReportAssessmentResponse(BaseModel):
    """Assessment of one observation report, as printed on the report sheet."""

    model_config = ConfigDict(from_attributes=True)

    report_id: str | None = None
    school_id: str
    period: str
    readiness_level: str
    readiness_score: int
    teaching_metrics: list[MetricRowResponse]
    observations: list[AssessmentRowResponse]
    action_items: list[ActionItemResponse]
