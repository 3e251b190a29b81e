from __future__ import annotations

from abc import ABC, abstractmethod

from src.schemas.report import ICTReport
from src.schemas.school import School, SchoolInput


class DuplicateIdError(ValueError):
    """Raised when a school or report is created with an id that is already taken."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id!r} already exists")


class SchoolRepository(ABC):
    """Abstract interface for all school and observation data access.

    Implementations return the canonical schema objects from
    :mod:`src.schemas`, never ORM rows, so the scoring services stay
    independent of the storage backend.
    """

    # ------------------------------------------------------------------
    # Schools
    # ------------------------------------------------------------------

    @abstractmethod
    async def list_schools(self) -> list[School]:
        """Return every school, ordered by name."""
        ...

    @abstractmethod
    async def get_school(self, school_id: str) -> School | None:
        """Return a single school, or ``None`` if not found."""
        ...

    @abstractmethod
    async def create_school(self, payload: SchoolInput, school_id: str | None = None) -> School:
        """Register a school.  A ``SCH``-prefixed id is generated when none is given.

        Raises:
            DuplicateIdError: If *school_id* is already taken.
        """
        ...

    @abstractmethod
    async def update_school(self, school_id: str, payload: SchoolInput) -> School | None:
        """Replace a school's profile.  Returns ``None`` if the school does not exist."""
        ...

    @abstractmethod
    async def delete_school(self, school_id: str) -> bool:
        """Delete a school and all of its reports.  Returns ``False`` if not found."""
        ...

    @abstractmethod
    async def list_districts(self) -> list[str]:
        """Return a sorted list of distinct, non-empty district names."""
        ...

    # ------------------------------------------------------------------
    # Observation reports
    # ------------------------------------------------------------------

    @abstractmethod
    async def list_reports(self, school_id: str | None = None) -> list[ICTReport]:
        """Return all reports, or only those of *school_id*, in insertion order."""
        ...

    @abstractmethod
    async def get_report(self, report_id: str) -> ICTReport | None:
        """Return a single report, or ``None`` if not found."""
        ...

    @abstractmethod
    async def create_report(self, report: ICTReport) -> ICTReport:
        """Store a report.  An ``RPT``-prefixed id is generated when it has none.

        Raises:
            DuplicateIdError: If the report id is already taken.
        """
        ...

    @abstractmethod
    async def update_report(self, report_id: str, report: ICTReport) -> ICTReport | None:
        """Replace a report's contents.  Returns ``None`` if it does not exist."""
        ...

    @abstractmethod
    async def delete_report(self, report_id: str) -> bool:
        """Delete a report.  Returns ``False`` if not found."""
        ...
