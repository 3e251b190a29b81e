from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, Field


class SchoolListParams(BaseModel):
    """Query parameters for filtering and paging the school list."""

    search: str | None = None
    district: str | None = None
    region: str | None = None
    environment: str | None = None
    readiness_level: Literal["Low", "Medium", "High"] | None = None
    date_from: datetime.date | None = None
    date_to: datetime.date | None = None
    page: int = Field(default=1, ge=1)
    page_size: int | None = Field(default=None, ge=1, le=500)
