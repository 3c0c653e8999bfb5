"""Student records backend: storage, DTOs and the CRUD service."""

from __future__ import annotations

from .errors import (
    StudentConflictError,
    StudentError,
    StudentNotFoundError,
    StudentValidationError,
)
from .models import StudentFilters, StudentInput, StudentRecord, StudentSummary
from .service import StudentService
from .storage import Student, init_student_storage

__all__ = [
    "Student",
    "StudentConflictError",
    "StudentError",
    "StudentFilters",
    "StudentInput",
    "StudentNotFoundError",
    "StudentRecord",
    "StudentService",
    "StudentSummary",
    "StudentValidationError",
    "init_student_storage",
]
