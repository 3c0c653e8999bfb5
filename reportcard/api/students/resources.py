"""Student records API resources.

Routes
------
``GET /students``
    List students, filtered by ``name``, ``className``, ``section`` and
    ``roll`` query parameters.
``POST /students``
    Create a student.
``GET /students/{student_id}`` / ``PUT /students/{student_id}``
    Read or update one student.
``POST /students/{student_id}/status``
    Grant or revoke system access; body ``{"status": bool, "reviewerId": int}``.

"""

from __future__ import annotations

import typing as typ

import falcon
import msgspec

from reportcard.api.envelope import success
from reportcard.api.errors import InvalidInputError
from reportcard.students.models import (
    MAX_SQL_INTEGER,
    StudentFilters,
    StudentInput,
)

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from reportcard.students.service import StudentService

__all__ = [
    "StudentCollectionResource",
    "StudentResource",
    "StudentStatusResource",
    "parse_student_id",
]


def parse_student_id(raw: str) -> int:
    """Return ``raw`` as an integer student identifier.

    Raises
    ------
    InvalidInputError
        If ``raw`` is not an integer between 1 and the largest storable id.

    """
    try:
        student_id = int(raw)
    except ValueError as exc:
        raise InvalidInputError("Invalid student ID provided", field="id") from exc
    if not 1 <= student_id <= MAX_SQL_INTEGER:
        raise InvalidInputError("Invalid student ID provided", field="id")
    return student_id


async def _read_object(req: Request) -> dict[str, typ.Any]:
    body = await req.get_media(default_when_empty=None)
    if not isinstance(body, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return body


async def _read_student_input(req: Request) -> StudentInput:
    body = await _read_object(req)
    try:
        return msgspec.convert(body, StudentInput)
    except msgspec.ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc


class StudentCollectionResource:
    """``/students``: list and create."""

    def __init__(self, student_service: StudentService) -> None:
        """Configure the resource with the student service."""
        self._student_service = student_service

    async def on_get(self, req: Request, resp: Response) -> None:
        """List students matching the query-string filters."""
        filters = StudentFilters.from_mapping(req.params)
        students = await self._student_service.list_students(filters)
        resp.media = success(students, "Students retrieved successfully")
        resp.status = falcon.HTTP_200

    async def on_post(self, req: Request, resp: Response) -> None:
        """Create a student from the JSON body."""
        data = await _read_student_input(req)
        record = await self._student_service.add_student(data)
        resp.media = success(record, "Student created successfully")
        resp.status = falcon.HTTP_201


class StudentResource:
    """``/students/{student_id}``: read and update."""

    def __init__(self, student_service: StudentService) -> None:
        """Configure the resource with the student service."""
        self._student_service = student_service

    async def on_get(self, _req: Request, resp: Response, *, student_id: str) -> None:
        """Return one student's full profile."""
        record = await self._student_service.get_student(parse_student_id(student_id))
        resp.media = success(record, "Student details retrieved successfully")
        resp.status = falcon.HTTP_200

    async def on_put(self, req: Request, resp: Response, *, student_id: str) -> None:
        """Apply a partial update to one student."""
        identifier = parse_student_id(student_id)
        data = await _read_student_input(req)
        record = await self._student_service.update_student(identifier, data)
        resp.media = success(record, "Student updated successfully")
        resp.status = falcon.HTTP_200


class StudentStatusResource:
    """``/students/{student_id}/status``: review system access."""

    def __init__(self, student_service: StudentService) -> None:
        """Configure the resource with the student service."""
        self._student_service = student_service

    async def on_post(self, req: Request, resp: Response, *, student_id: str) -> None:
        """Set a student's system access flag."""
        identifier = parse_student_id(student_id)
        body = await _read_object(req)

        reviewer_id = body.get("reviewerId")
        if reviewer_id is not None and (
            isinstance(reviewer_id, bool)
            or not isinstance(reviewer_id, int)
            or not 0 <= reviewer_id <= MAX_SQL_INTEGER
        ):
            raise InvalidInputError(
                "must be a non-negative integer", field="reviewerId"
            )

        record = await self._student_service.set_student_status(
            identifier,
            reviewer_id=reviewer_id,
            status=body.get("status"),
        )
        resp.media = success(record, "Student status updated successfully")
        resp.status = falcon.HTTP_200
