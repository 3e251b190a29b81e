"""Observation report schema.

An ``ICTReport`` is one dated snapshot of a school's ICT metrics.  The metric
groups accept both the snake_case names used by the API and the camelCase
names produced by older form submissions (``ictTrainedTeachers``,
``schoolId`` ...), so everything downstream of this module sees a single
canonical shape.  Missing groups, missing fields and explicit ``null`` values
collapse to zero / ``False`` / empty defaults.
"""

from __future__ import annotations

import datetime
from typing import Any

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _ReportModel(BaseModel):
    """Frozen base that accepts camelCase or snake_case keys and drops nulls."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=AliasGenerator(validation_alias=to_camel),
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Infrastructure(_ReportModel):
    computers: int = 0
    tablets: int = 0
    projectors: int = 0
    printers: int = 0
    functional_devices: int = 0
    internet_connection: str = "None"  # None / Slow / Medium / Fast, or a connection type
    internet_speed_mbps: float = 0.0
    power_backup: bool | str | list[str] = False  # flag, "Solar,Generator" or a source list
    power_source: str | None = None


class Usage(_ReportModel):
    teachers_using_ict: int = 0
    total_teachers: int = 0
    weekly_computer_lab_hours: float = 0.0
    student_digital_literacy_rate: float = 0.0  # percentage, 0-100


class Capacity(_ReportModel):
    ict_trained_teachers: int = 0
    support_staff: int = 0


class Software(_ReportModel):
    operating_systems: list[str] = Field(default_factory=list)
    educational_software: list[str] = Field(default_factory=list)
    office_applications: bool = False


class ICTReport(_ReportModel):
    """A periodic observation of one school.

    ``period`` is a human label ("Term 1 2024") and is never used for
    ordering; ``date`` is kept as the ISO string it was submitted with and is
    parsed by :func:`src.services.reports.parse_report_date` when ordering.
    """

    id: str | None = None
    school_id: str
    period: str = ""
    date: str
    infrastructure: Infrastructure = Field(default_factory=Infrastructure)
    usage: Usage = Field(default_factory=Usage)
    capacity: Capacity = Field(default_factory=Capacity)
    software: Software = Field(default_factory=Software)

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_iso(cls, value: Any) -> Any:
        if isinstance(value, (datetime.date, datetime.datetime)):
            return value.isoformat()
        return value
