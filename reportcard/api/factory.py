"""Factory for building a ``ReportService`` from environment configuration.

Usage
-----
::

    from reportcard.api.factory import build_report_service

    service = build_report_service()

"""

from __future__ import annotations

from reportcard.client import HttpStudentDataClient, StudentApiConfig
from reportcard.rendering import PdfReportRenderer, RendererConfig
from reportcard.reporting import (
    ReportEventLogger,
    ReportService,
    ReportServiceDependencies,
)

__all__ = ["build_report_service"]


def build_report_service(
    api_config: StudentApiConfig | None = None,
    renderer_config: RendererConfig | None = None,
    *,
    student_client: HttpStudentDataClient | None = None,
) -> ReportService:
    """Build a ``ReportService`` wired to the HTTP client and PDF renderer.

    Parameters
    ----------
    api_config
        Students API settings; read from the environment when omitted.
    renderer_config
        Renderer settings; read from the environment when omitted.
    student_client
        Pre-built students API client. When given, ``api_config`` is ignored
        and the caller remains responsible for closing the client.

    Returns
    -------
    ReportService
        Service ready for report generation.

    """
    dependencies = ReportServiceDependencies(
        student_client=student_client
        or HttpStudentDataClient(api_config or StudentApiConfig.from_env()),
        renderer=PdfReportRenderer(renderer_config or RendererConfig.from_env()),
    )
    return ReportService(dependencies, event_logger=ReportEventLogger())
