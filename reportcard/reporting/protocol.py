"""Collaborator protocols consumed by the report orchestrator.

Both protocols are ``runtime_checkable`` so the orchestrator can tell a
usable collaborator from a missing one, and so tests can substitute
lightweight doubles.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from reportcard.reporting.models import ReportMetadata
    from reportcard.students.models import StudentRecord, StudentSummary


@typ.runtime_checkable
class StudentDataClient(typ.Protocol):
    """Fetch student records and report liveness."""

    async def list_students(
        self, filters: typ.Mapping[str, str]
    ) -> list[StudentSummary]:
        """Return students matching ``filters``; absent keys do not filter."""
        ...

    async def get_student_by_id(self, student_id: int) -> StudentRecord | None:
        """Return the student, or ``None`` when no such student exists.

        Failures to communicate raise; ``None`` is reserved for absence.
        """
        ...

    async def health_check(self) -> None:
        """Return when the data source is reachable; raise otherwise."""
        ...


@typ.runtime_checkable
class ReportRenderer(typ.Protocol):
    """Persist rendered student reports and purge aged ones."""

    async def generate_student_report(
        self,
        student: StudentRecord,
        metadata: ReportMetadata,
    ) -> str:
        """Render a report and return the artifact's file-system location."""
        ...

    async def cleanup_old_reports(self) -> int:
        """Remove aged artifacts and return how many were removed."""
        ...
