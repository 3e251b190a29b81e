"""Import schools and observation reports from JSON exports into SQLite.

Accepts either a bare list or an object wrapping the list under ``"schools"``
/ ``"reports"`` (the shape of the dashboard's mock data files).  Keys may be
camelCase or snake_case.

Usage::

    python -m src.data.import_json --schools schools.json --reports reports.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.config import get_settings
from src.db.sqlite_repo import SQLiteSchoolRepository
from src.schemas.report import ICTReport
from src.schemas.school import SchoolInput
from src.services.reports import MalformedDateError, parse_report_date

logger = logging.getLogger(__name__)


def _load_records(path: Path, key: str) -> list[dict[str, Any]]:
    """Read a JSON file holding either a list or ``{key: [...]}``."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of {key}")
    return data


async def import_json(db_path: str, schools_path: Path | None, reports_path: Path | None) -> dict[str, int]:
    """Import the given files.  Returns counts of imported and skipped rows.

    Invalid rows (schema errors, unknown school, malformed date) are logged
    and skipped; the rest of the file is still imported.
    """
    repo = SQLiteSchoolRepository(db_path)
    await repo.init_db()
    counts = {"schools": 0, "reports": 0, "skipped": 0}

    try:
        if schools_path is not None:
            for record in _load_records(schools_path, "schools"):
                if not isinstance(record, dict):
                    logger.warning("Skipping school entry that is not an object: %r", record)
                    counts["skipped"] += 1
                    continue
                try:
                    payload = SchoolInput.model_validate(record)
                except ValidationError as exc:
                    logger.warning("Skipping school %r: %s", record.get("name"), exc)
                    counts["skipped"] += 1
                    continue
                school_id = record.get("id")
                if school_id and await repo.get_school(str(school_id)) is not None:
                    await repo.update_school(str(school_id), payload)
                else:
                    await repo.create_school(payload, school_id=str(school_id) if school_id else None)
                counts["schools"] += 1

        if reports_path is not None:
            for record in _load_records(reports_path, "reports"):
                if not isinstance(record, dict):
                    logger.warning("Skipping report entry that is not an object: %r", record)
                    counts["skipped"] += 1
                    continue
                try:
                    report = ICTReport.model_validate(record)
                    parse_report_date(report.date, report.id)
                except (ValidationError, MalformedDateError) as exc:
                    logger.warning("Skipping report %r: %s", record.get("id"), exc)
                    counts["skipped"] += 1
                    continue
                if await repo.get_school(report.school_id) is None:
                    logger.warning("Skipping report %r: unknown school %r", report.id, report.school_id)
                    counts["skipped"] += 1
                    continue
                if report.id and await repo.get_report(report.id) is not None:
                    await repo.update_report(report.id, report)
                else:
                    await repo.create_report(report)
                counts["reports"] += 1
    finally:
        await repo.engine.dispose()

    logger.info(
        "Imported %d school(s) and %d report(s), skipped %d",
        counts["schools"],
        counts["reports"],
        counts["skipped"],
    )
    return counts


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Import schools and ICT reports from JSON files")
    parser.add_argument("--schools", type=Path, help="JSON file of schools")
    parser.add_argument("--reports", type=Path, help="JSON file of observation reports")
    parser.add_argument("--db", default=None, help="SQLite path (defaults to SQLITE_PATH)")
    args = parser.parse_args(argv)

    if args.schools is None and args.reports is None:
        parser.error("nothing to import: pass --schools and/or --reports")

    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    db_path = args.db or settings.SQLITE_PATH
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    asyncio.run(import_json(db_path, args.schools, args.reports))


if __name__ == "__main__":
    main()
