"""Report service API resources.

Routes
------
``GET /api/v1/students``
    List students through the report service's data client.
``POST /api/v1/students/{student_id}/report``
    Render a report; optional body ``{"generatedBy": "admin1"}``.
``POST /api/v1/reports/cleanup``
    Remove reports older than the renderer's retention period.

"""

from __future__ import annotations

import typing as typ

import falcon

from reportcard.api.envelope import success
from reportcard.api.errors import InvalidInputError
from reportcard.api.students.resources import parse_student_id

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from reportcard.reporting.service import ReportService

__all__ = [
    "DEFAULT_GENERATED_BY",
    "ReportCleanupResource",
    "ReportStudentsResource",
    "StudentReportResource",
]

DEFAULT_GENERATED_BY = "system"


def _query_filters(req: Request) -> dict[str, str]:
    return {
        key: value.strip()
        for key, value in req.params.items()
        if isinstance(value, str) and value.strip()
    }


class ReportStudentsResource:
    """Student listing proxied through the report service."""

    def __init__(self, report_service: ReportService) -> None:
        """Configure the resource with the report service."""
        self._report_service = report_service

    async def on_get(self, req: Request, resp: Response) -> None:
        """List students matching the query-string filters."""
        students = await self._report_service.list_students(_query_filters(req))
        resp.media = success(students, "Students retrieved successfully")
        resp.status = falcon.HTTP_200


class StudentReportResource:
    """On-demand report generation for one student."""

    def __init__(self, report_service: ReportService) -> None:
        """Configure the resource with the report service."""
        self._report_service = report_service

    async def _generated_by(self, req: Request) -> str:
        body = await req.get_media(default_when_empty=None)
        if body is None:
            return DEFAULT_GENERATED_BY
        if not isinstance(body, dict):
            raise InvalidInputError("Request body must be a JSON object")

        generated_by = body.get("generatedBy")
        if generated_by is None:
            return DEFAULT_GENERATED_BY
        if not isinstance(generated_by, str) or not generated_by.strip():
            raise InvalidInputError("must be a non-empty string", field="generatedBy")
        return generated_by.strip()

    async def on_post(self, req: Request, resp: Response, *, student_id: str) -> None:
        """Generate a report and describe the produced artifact."""
        identifier = parse_student_id(student_id)
        generated_by = await self._generated_by(req)
        result = await self._report_service.generate_report(identifier, generated_by)
        resp.media = success(result.to_dict(), "Report generated successfully")
        resp.status = falcon.HTTP_201


class ReportCleanupResource:
    """Retention sweep for rendered reports."""

    def __init__(self, report_service: ReportService) -> None:
        """Configure the resource with the report service."""
        self._report_service = report_service

    async def on_post(self, _req: Request, resp: Response) -> None:
        """Remove aged reports and return how many were deleted."""
        removed = await self._report_service.cleanup_old_reports()
        resp.media = success({"removed": removed}, "Old reports cleaned up")
        resp.status = falcon.HTTP_200
