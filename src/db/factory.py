from __future__ import annotations

from functools import lru_cache

from src.config import get_settings
from src.db.base import SchoolRepository
from src.db.sqlite_repo import SQLiteSchoolRepository


@lru_cache
def _sqlite_repository(sqlite_path: str) -> SQLiteSchoolRepository:
    return SQLiteSchoolRepository(sqlite_path)


def get_school_repository() -> SchoolRepository:
    """Return the appropriate :class:`SchoolRepository` implementation.

    The backend is selected by the ``DB_BACKEND`` setting:

    * ``"sqlite"`` (default) -- uses :class:`SQLiteSchoolRepository`

    Raises:
        ValueError: If the requested backend is unknown.
    """
    settings = get_settings()
    backend = settings.DB_BACKEND.lower()

    if backend == "sqlite":
        return _sqlite_repository(settings.SQLITE_PATH)

    raise ValueError(f"Unknown DB_BACKEND: {backend!r}. Supported values: 'sqlite'.")
