"""Persistence models for student records."""

from __future__ import annotations

import datetime as dt
import typing as typ

from sqlalchemy import Boolean, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from reportcard.common.time import utcnow

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Dialect
    from sqlalchemy.ext.asyncio import AsyncEngine


class Base(DeclarativeBase):
    """Base declarative class for student models."""


class UTCDateTime(TypeDecorator[dt.datetime]):
    """DateTime wrapper that round-trips UTC tzinfo even on SQLite."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Store aware values as UTC; naive values are assumed to be UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)

    def process_result_value(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Ensure result datetimes are UTC and timezone aware."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)


class Student(Base):
    """A student profile managed by the records backend."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100))
    middle_name: Mapped[str | None] = mapped_column(String(100), default=None)
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(320), unique=True)
    phone: Mapped[str | None] = mapped_column(String(32), default=None)
    gender: Mapped[str | None] = mapped_column(String(16), default=None)
    dob: Mapped[dt.date | None] = mapped_column(Date(), default=None)
    class_name: Mapped[str | None] = mapped_column(String(50), default=None)
    section: Mapped[str | None] = mapped_column(String(50), default=None)
    roll: Mapped[int | None] = mapped_column(Integer, default=None)
    admission_date: Mapped[dt.date | None] = mapped_column(Date(), default=None)
    father_name: Mapped[str | None] = mapped_column(String(100), default=None)
    mother_name: Mapped[str | None] = mapped_column(String(100), default=None)
    guardian_name: Mapped[str | None] = mapped_column(String(100), default=None)
    guardian_phone: Mapped[str | None] = mapped_column(String(32), default=None)
    current_address: Mapped[str | None] = mapped_column(Text, default=None)
    permanent_address: Mapped[str | None] = mapped_column(Text, default=None)
    system_access: Mapped[bool] = mapped_column(Boolean, default=False)
    reviewer_id: Mapped[int | None] = mapped_column(Integer, default=None)
    created_at: Mapped[dt.datetime] = mapped_column(UTCDateTime(), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), default=utcnow, onupdate=utcnow
    )


async def init_student_storage(engine: AsyncEngine) -> None:
    """Create the student tables if they are absent."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
