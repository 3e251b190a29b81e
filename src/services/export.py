"""CSV export of the school list with readiness columns."""

from __future__ import annotations

import datetime
from collections.abc import Sequence

import polars as pl

from src.services.filters import SchoolReadinessRow

NO_REPORTS = "No reports"

CSV_SCHEMA: dict[str, pl.DataType] = {
    "Name": pl.Utf8,
    "District": pl.Utf8,
    "Region": pl.Utf8,
    "Sub-County": pl.Utf8,
    "Type": pl.Utf8,
    "Environment": pl.Utf8,
    "Total Students": pl.Int64,
    "ICT Readiness Level": pl.Utf8,
    "ICT Readiness Score": pl.Utf8,
    "Last Report Date": pl.Utf8,
    "Principal": pl.Utf8,
    "Email": pl.Utf8,
    "Phone": pl.Utf8,
}


def schools_frame(rows: Sequence[SchoolReadinessRow]) -> pl.DataFrame:
    """Tabulate readiness rows in export column order."""
    records = [
        {
            "Name": row.school.name,
            "District": row.school.district,
            "Region": row.region,
            "Sub-County": row.school.sub_county,
            "Type": row.school.type,
            "Environment": row.school.environment,
            "Total Students": row.school.total_students,
            "ICT Readiness Level": row.readiness.level,
            "ICT Readiness Score": f"{row.readiness.score:.1f}",
            "Last Report Date": row.last_report_date or NO_REPORTS,
            "Principal": row.school.head_teacher_name,
            "Email": row.school.email,
            "Phone": row.school.phone,
        }
        for row in rows
    ]
    return pl.DataFrame(records, schema=CSV_SCHEMA)


def schools_csv(rows: Sequence[SchoolReadinessRow]) -> str:
    """Render readiness rows as CSV text with a header line."""
    return schools_frame(rows).write_csv()


def export_filename(today: datetime.date | None = None) -> str:
    today = today or datetime.date.today()
    return f"schools_export_{today.isoformat()}.csv"
