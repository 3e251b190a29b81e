from __future__ import annotations

from typing import Any

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SchoolInput(BaseModel):
    """School profile as submitted by the registration / edit form.

    Accepts camelCase keys (``subCounty``, ``emisNumber``) as well as
    snake_case.  The grouped attribute sets of the full form (governance,
    connectivity, software, human capacity, community engagement, facilities,
    performance) are stored verbatim under ``profile``.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=AliasGenerator(validation_alias=to_camel),
        extra="ignore",
    )

    name: str
    emis_number: str | None = None
    upi_code: str | None = None

    district: str = ""
    sub_county: str | None = None
    region: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    type: str | None = None  # Primary / Secondary / Tertiary
    ownership: str | None = None  # Government / Private / Community
    environment: str | None = None  # Urban / Rural

    total_students: int = 0
    total_teachers: int = 0

    computers: int = 0
    tablets: int = 0
    projectors: int = 0
    bandwidth_mbps: float | None = None
    power_backup: str | None = None  # comma-separated sources, e.g. "Solar,Generator"

    head_teacher_name: str | None = None
    email: str | None = None
    phone: str | None = None

    profile: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class School(SchoolInput):
    """A registered school, keyed by a stable string identifier."""

    id: str


class ReadinessResponse(BaseModel):
    """Readiness classification for a school or a single report."""

    level: str
    score: int


class SchoolListItemResponse(BaseModel):
    """A row of the school list: profile, region and current readiness."""

    school: School
    region: str
    readiness: ReadinessResponse
    last_report_date: str | None = None


class SchoolPageResponse(BaseModel):
    """Paginated envelope for the school list."""

    data: list[SchoolListItemResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
