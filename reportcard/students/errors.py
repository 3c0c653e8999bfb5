"""Errors specific to the student records backend."""

from __future__ import annotations


class StudentError(Exception):
    """Base class for student backend errors."""


class StudentNotFoundError(StudentError):
    """Raised when no student exists for an identifier."""

    def __init__(self, student_id: int) -> None:
        """Initialise with the missing student identifier."""
        self.student_id = student_id
        super().__init__(f"Student with ID {student_id} not found")


class StudentValidationError(StudentError):
    """Raised when student input fails validation."""

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialise with a reason and the offending field, if known."""
        self.reason = reason
        self.field = field
        message = f"{field}: {reason}" if field is not None else reason
        super().__init__(message)

    @classmethod
    def required(cls, field: str) -> StudentValidationError:
        """Return an error for a missing or blank required field."""
        return cls("is required", field=field)


class StudentConflictError(StudentError):
    """Raised when a write would duplicate a unique student attribute."""

    def __init__(self, email: str | None) -> None:
        """Initialise with the conflicting email address."""
        self.email = email
        super().__init__(f"A student with email {email!r} already exists")
