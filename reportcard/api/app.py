"""Application factory for the reportcard Falcon ASGI application.

Routes are registered according to the dependencies provided:

- ``/health`` and ``/ready`` are always available.
- ``/students`` routes need a database ``session_factory``.
- ``/api/v1/...`` report routes need a ``report_service``.

Usage
-----
Create a health-only app::

    app = create_app()

Create an app serving both the student backend and report routes::

    deps = AppDependencies(
        session_factory=session_factory,
        report_service=report_service,
    )
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from reportcard.api.errors import (
    InvalidInputError,
    handle_invalid_input,
    handle_renderer_error,
    handle_report_service_error,
    handle_student_conflict,
    handle_student_not_found,
    handle_student_validation,
)
from reportcard.api.health.resources import (
    HealthResource,
    ReadyResource,
    ServiceHealthResource,
)
from reportcard.rendering.errors import RendererError
from reportcard.reporting.errors import ReportServiceError
from reportcard.students.errors import (
    StudentConflictError,
    StudentNotFoundError,
    StudentValidationError,
)

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from reportcard.reporting.service import ReportService

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    session_factory
        Async session factory for the students database. Enables the
        ``/students`` routes.
    report_service
        Report orchestrator. Enables the ``/api/v1`` routes.
    middleware
        Extra Falcon middleware, such as lifespan hooks.

    """

    session_factory: async_sessionmaker[AsyncSession] | None = None
    report_service: ReportService | None = None
    middleware: tuple[object, ...] = ()


def _add_student_routes(
    app: falcon.asgi.App, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    from reportcard.api.students.resources import (
        StudentCollectionResource,
        StudentResource,
        StudentStatusResource,
    )
    from reportcard.students.service import StudentService

    service = StudentService(session_factory)
    app.add_route("/students", StudentCollectionResource(service))
    app.add_route("/students/{student_id}", StudentResource(service))
    app.add_route("/students/{student_id}/status", StudentStatusResource(service))


def _add_report_routes(app: falcon.asgi.App, report_service: ReportService) -> None:
    from reportcard.api.reports.resources import (
        ReportCleanupResource,
        ReportStudentsResource,
        StudentReportResource,
    )

    app.add_route("/api/v1/health", ServiceHealthResource(report_service))
    app.add_route("/api/v1/students", ReportStudentsResource(report_service))
    app.add_route(
        "/api/v1/students/{student_id}/report",
        StudentReportResource(report_service),
    )
    app.add_route("/api/v1/reports/cleanup", ReportCleanupResource(report_service))


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies. When ``None``, only health
        endpoints are available.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    deps = dependencies or AppDependencies()
    app = falcon.asgi.App(middleware=list(deps.middleware))  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    if deps.session_factory is not None:
        _add_student_routes(app, deps.session_factory)
    if deps.report_service is not None:
        _add_report_routes(app, deps.report_service)

    app.add_error_handler(InvalidInputError, handle_invalid_input)
    app.add_error_handler(StudentValidationError, handle_student_validation)
    app.add_error_handler(StudentNotFoundError, handle_student_not_found)
    app.add_error_handler(StudentConflictError, handle_student_conflict)
    app.add_error_handler(ReportServiceError, handle_report_service_error)
    app.add_error_handler(RendererError, handle_renderer_error)

    return app
