"""Student records service backing the ``/students`` HTTP surface.

Usage
-----
>>> from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
>>> engine = create_async_engine("sqlite+aiosqlite:///students.db")
>>> service = StudentService(async_sessionmaker(engine, expire_on_commit=False))
>>> students = await service.list_students(StudentFilters(class_name="7"))

"""

from __future__ import annotations

import typing as typ

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError

from reportcard.common.time import utcnow
from reportcard.logging import get_logger, log_info

from .errors import (
    StudentConflictError,
    StudentNotFoundError,
    StudentValidationError,
)
from .models import StudentFilters, StudentInput, StudentRecord, StudentSummary
from .storage import Student

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

type SessionFactory = async_sessionmaker[AsyncSession]

logger = get_logger(__name__)

_REQUIRED_FIELDS = ("first_name", "last_name", "email")


def _to_summary(row: Student) -> StudentSummary:
    return StudentSummary(
        id=row.id,
        first_name=row.first_name,
        middle_name=row.middle_name,
        last_name=row.last_name,
        email=row.email,
        class_name=row.class_name,
        section=row.section,
        roll=row.roll,
        system_access=row.system_access,
    )


def _to_record(row: Student) -> StudentRecord:
    return StudentRecord(
        id=row.id,
        first_name=row.first_name,
        middle_name=row.middle_name,
        last_name=row.last_name,
        email=row.email,
        class_name=row.class_name,
        section=row.section,
        roll=row.roll,
        system_access=row.system_access,
        phone=row.phone,
        gender=row.gender,
        dob=row.dob,
        admission_date=row.admission_date,
        father_name=row.father_name,
        mother_name=row.mother_name,
        guardian_name=row.guardian_name,
        guardian_phone=row.guardian_phone,
        current_address=row.current_address,
        permanent_address=row.permanent_address,
        reviewer_id=row.reviewer_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _check_required(fields: dict[str, typ.Any], names: typ.Iterable[str]) -> None:
    for name in names:
        value = fields.get(name)
        if not isinstance(value, str) or not value.strip():
            raise StudentValidationError.required(name)


def _strip_strings(fields: dict[str, typ.Any]) -> dict[str, typ.Any]:
    return {
        name: value.strip() if isinstance(value, str) else value
        for name, value in fields.items()
    }


class StudentService:
    """Create, read, update and review student records.

    Parameters
    ----------
    session_factory
        Async session factory bound to the students database.

    """

    def __init__(self, session_factory: SessionFactory) -> None:
        """Configure the service with a session factory."""
        self._session_factory = session_factory

    async def list_students(
        self, filters: StudentFilters | None = None
    ) -> list[StudentSummary]:
        """Return students matching ``filters`` ordered by identifier.

        ``name`` is a case-insensitive substring match against the first,
        middle and last names; the remaining filters match exactly.
        """
        filters = filters or StudentFilters()
        stmt = select(Student).order_by(Student.id)

        if filters.name is not None:
            pattern = f"%{filters.name.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Student.first_name).like(pattern),
                    func.lower(func.coalesce(Student.middle_name, "")).like(pattern),
                    func.lower(Student.last_name).like(pattern),
                )
            )
        if filters.class_name is not None:
            stmt = stmt.where(Student.class_name == filters.class_name)
        if filters.section is not None:
            stmt = stmt.where(Student.section == filters.section)
        if filters.roll is not None:
            stmt = stmt.where(Student.roll == filters.roll)

        async with self._session_factory() as session:
            rows = (await session.scalars(stmt)).all()
        return [_to_summary(row) for row in rows]

    async def get_student(self, student_id: int) -> StudentRecord:
        """Return the full profile for ``student_id``.

        Raises
        ------
        StudentNotFoundError
            If no student has that identifier.

        """
        async with self._session_factory() as session:
            row = await session.get(Student, student_id)
            if row is None:
                raise StudentNotFoundError(student_id)
            return _to_record(row)

    async def add_student(self, data: StudentInput) -> StudentRecord:
        """Create a student from ``data``.

        Raises
        ------
        StudentValidationError
            If a required field is missing or blank.
        StudentConflictError
            If the email address is already registered.

        """
        fields = _strip_strings(data.supplied_fields())
        _check_required(fields, _REQUIRED_FIELDS)

        try:
            async with self._session_factory() as session, session.begin():
                row = Student(**fields)
                session.add(row)
                await session.flush()
                record = _to_record(row)
        except IntegrityError as exc:
            raise StudentConflictError(fields.get("email")) from exc

        log_info(logger, "Created student id=%d", record.id)
        return record

    async def update_student(
        self, student_id: int, data: StudentInput
    ) -> StudentRecord:
        """Apply the supplied fields of ``data`` to an existing student.

        Raises
        ------
        StudentNotFoundError
            If no student has that identifier.
        StudentValidationError
            If a required field is supplied blank.
        StudentConflictError
            If the new email address belongs to another student.

        """
        fields = _strip_strings(data.supplied_fields())
        _check_required(fields, (name for name in _REQUIRED_FIELDS if name in fields))

        try:
            async with self._session_factory() as session, session.begin():
                row = await session.get(Student, student_id)
                if row is None:
                    raise StudentNotFoundError(student_id)
                for name, value in fields.items():
                    setattr(row, name, value)
                row.updated_at = utcnow()
                await session.flush()
                record = _to_record(row)
        except IntegrityError as exc:
            raise StudentConflictError(fields.get("email")) from exc

        log_info(logger, "Updated student id=%d fields=%s", student_id, sorted(fields))
        return record

    async def set_student_status(
        self,
        student_id: int,
        *,
        reviewer_id: int | None,
        status: object,
    ) -> StudentRecord:
        """Grant or revoke system access for a student.

        Raises
        ------
        StudentValidationError
            If ``status`` is not a boolean.
        StudentNotFoundError
            If no student has that identifier.

        """
        if not isinstance(status, bool):
            raise StudentValidationError("Status must be a boolean value")

        async with self._session_factory() as session, session.begin():
            row = await session.get(Student, student_id)
            if row is None:
                raise StudentNotFoundError(student_id)
            row.system_access = status
            row.reviewer_id = reviewer_id
            row.updated_at = utcnow()
            await session.flush()
            record = _to_record(row)

        log_info(
            logger,
            "Student id=%d system_access=%s reviewer_id=%s",
            student_id,
            status,
            reviewer_id,
        )
        return record
