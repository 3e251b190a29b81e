from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Async-compatible declarative base for all ORM models."""


class SchoolRecord(Base):
    __tablename__ = "schools"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    emis_number: Mapped[str | None] = mapped_column(String(40), nullable=True)
    upi_code: Mapped[str | None] = mapped_column(String(40), nullable=True)

    district: Mapped[str] = mapped_column(String(100), nullable=False, default="", index=True)
    sub_county: Mapped[str | None] = mapped_column(String(100), nullable=True)
    region: Mapped[str | None] = mapped_column(String(50), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    type: Mapped[str | None] = mapped_column(String(50), nullable=True)  # Primary / Secondary / Tertiary
    ownership: Mapped[str | None] = mapped_column(String(50), nullable=True)
    environment: Mapped[str | None] = mapped_column(String(20), nullable=True)  # Urban / Rural

    total_students: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_teachers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    computers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tablets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    projectors: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bandwidth_mbps: Mapped[float | None] = mapped_column(Float, nullable=True)
    power_backup: Mapped[str | None] = mapped_column(String(255), nullable=True)

    head_teacher_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Grouped form sections (governance, connectivity, facilities, ...)
    profile: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<SchoolRecord(id={self.id!r}, name={self.name!r}, district={self.district!r})>"


class ICTReportRecord(Base):
    __tablename__ = "ict_reports"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    school_id: Mapped[str] = mapped_column(
        String(40), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True
    )
    period: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    date: Mapped[str] = mapped_column(Text, nullable=False)  # ISO-8601 as submitted

    infrastructure: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    usage: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    capacity: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    software: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<ICTReportRecord(id={self.id!r}, school_id={self.school_id!r}, period={self.period!r})>"
