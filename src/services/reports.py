"""Report lookup: date parsing, per-school chronological series and latest report.

Ordering always uses the parsed ``date`` of a report, never its ``period``
label.  Sorting is stable, so reports sharing a timestamp keep their input
order; the *latest* of a tied group is the one that appears last.  The
dashboard this replaces sorted descending and so kept the *first* of a tie;
here the most recently submitted report wins instead.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable

from src.schemas.report import ICTReport


class MalformedDateError(ValueError):
    """Raised when a report date cannot be parsed as an ISO-8601 timestamp."""

    def __init__(self, value: object, report_id: str | None = None) -> None:
        self.value = value
        self.report_id = report_id
        where = f" on report {report_id!r}" if report_id else ""
        super().__init__(f"Malformed report date{where}: {value!r}")


def parse_report_date(value: object, report_id: str | None = None) -> datetime.datetime:
    """Parse a report date into a timezone-aware datetime.

    Date-only values and naive timestamps are taken to be UTC so that they
    compare cleanly with offset-carrying ones.

    Raises:
        MalformedDateError: If *value* is empty or not ISO-8601.
    """
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime.combine(value, datetime.time())
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise MalformedDateError(value, report_id) from exc
    else:
        raise MalformedDateError(value, report_id)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def sort_reports_by_date(reports: Iterable[ICTReport]) -> list[ICTReport]:
    """Return a new list of *reports* in ascending date order (stable)."""
    return sorted(reports, key=lambda r: parse_report_date(r.date, r.id))


def latest_of(reports: Iterable[ICTReport]) -> ICTReport | None:
    """Return the most recent report, or ``None`` for an empty collection."""
    ordered = sort_reports_by_date(reports)
    return ordered[-1] if ordered else None


def group_reports_by_school(reports: Iterable[ICTReport]) -> dict[str, list[ICTReport]]:
    """Bucket reports by ``school_id``, preserving input order within each bucket."""
    grouped: dict[str, list[ICTReport]] = {}
    for report in reports:
        grouped.setdefault(report.school_id, []).append(report)
    return grouped


def get_school_reports(school_id: str, reports: Iterable[ICTReport]) -> list[ICTReport]:
    """Return all reports for *school_id* in ascending date order.

    An unknown school yields an empty list.
    """
    return sort_reports_by_date(r for r in reports if r.school_id == school_id)


def get_latest_report(school_id: str, reports: Iterable[ICTReport]) -> ICTReport | None:
    """Return the latest report for *school_id*, or ``None`` if it has none."""
    return latest_of(r for r in reports if r.school_id == school_id)
