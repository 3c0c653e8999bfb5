"""Falcon error handlers translating domain exceptions into HTTP responses.

Usage
-----
Handlers are registered by :func:`reportcard.api.app.create_app`; the
mapping below documents the status codes::

    InvalidInputError, StudentValidationError, InvalidArgumentError -> 400
    StudentNotFoundError, NotFoundError                          -> 404
    StudentConflictError                                         -> 409
    RenderError, RendererError                                   -> 500
    DataFetchError                                               -> 502

"""

from __future__ import annotations

import typing as typ

import falcon

from reportcard.logging import get_logger, log_error, log_warning
from reportcard.reporting.errors import (
    DataFetchError,
    InvalidArgumentError,
    NotFoundError,
    RenderError,
    ReportServiceError,
)
from reportcard.rendering.errors import RendererError
from reportcard.students.errors import (
    StudentConflictError,
    StudentNotFoundError,
    StudentValidationError,
)

from .envelope import failure

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = [
    "InvalidInputError",
    "handle_invalid_input",
    "handle_renderer_error",
    "handle_report_service_error",
    "handle_student_conflict",
    "handle_student_not_found",
    "handle_student_validation",
]

logger = get_logger(__name__)


class InvalidInputError(Exception):
    """Raised for malformed request input that should map to HTTP 400.

    Attributes
    ----------
    reason
        Human-readable description of the validation failure.
    field
        Optional name of the input field that failed validation.

    """

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialize with a validation reason and optional field name."""
        self.reason = reason
        self.field = field
        message = f"{field}: {reason}" if field is not None else reason
        super().__init__(message)


def _respond(resp: Response, status: str, message: str, *, error: str) -> None:
    resp.status = status
    resp.media = failure(message, error=error)


async def handle_invalid_input(
    _req: Request,
    resp: Response,
    ex: InvalidInputError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidInputError`` to HTTP 400."""
    _respond(resp, falcon.HTTP_400, ex.reason, error="Invalid input")


async def handle_student_validation(
    _req: Request,
    resp: Response,
    ex: StudentValidationError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``StudentValidationError`` to HTTP 400."""
    _respond(resp, falcon.HTTP_400, str(ex), error="Invalid student data")


async def handle_student_not_found(
    _req: Request,
    resp: Response,
    ex: StudentNotFoundError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``StudentNotFoundError`` to HTTP 404."""
    _respond(resp, falcon.HTTP_404, str(ex), error="Student not found")


async def handle_student_conflict(
    _req: Request,
    resp: Response,
    ex: StudentConflictError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``StudentConflictError`` to HTTP 409."""
    _respond(resp, falcon.HTTP_409, str(ex), error="Student already exists")


_REPORT_ERRORS: dict[type[ReportServiceError], tuple[str, str]] = {
    InvalidArgumentError: (falcon.HTTP_400, "Invalid student ID"),
    NotFoundError: (falcon.HTTP_404, "Student not found"),
    DataFetchError: (falcon.HTTP_502, "Student data unavailable"),
    RenderError: (falcon.HTTP_500, "Report generation failed"),
}


async def handle_report_service_error(
    _req: Request,
    resp: Response,
    ex: ReportServiceError,
    _params: dict[str, typ.Any],
) -> None:
    """Map report orchestrator errors to HTTP by failing stage."""
    status, title = _REPORT_ERRORS.get(
        type(ex), (falcon.HTTP_500, "Report service error")
    )
    if status in {falcon.HTTP_500, falcon.HTTP_502}:
        log_error(logger, "Report request failed at stage %s: %s", ex.stage, ex)
    else:
        log_warning(logger, "Report request rejected at stage %s: %s", ex.stage, ex)
    _respond(resp, status, str(ex), error=title)


async def handle_renderer_error(
    _req: Request,
    resp: Response,
    ex: RendererError,
    _params: dict[str, typ.Any],
) -> None:
    """Map renderer failures surfaced by report cleanup to HTTP 500."""
    log_error(logger, "Renderer failure: %s", ex)
    _respond(resp, falcon.HTTP_500, str(ex), error="Report cleanup failed")
