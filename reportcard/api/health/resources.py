"""Health resources.

``/health`` and ``/ready`` are process probes for orchestrators and never
touch collaborators. ``/api/v1/health`` runs the report service's
aggregate check and answers 503 when any component is unhealthy.
"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from reportcard.api.envelope import success

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from reportcard.reporting.service import ReportService

__all__ = ["HealthResource", "ReadyResource", "ServiceHealthResource"]


class HealthResource:
    """Liveness probe answering ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe answering ``{"status": "ready"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready."""
        resp.media = {"status": "ready"}
        resp.status = HTTPStatus.OK


class ServiceHealthResource:
    """Aggregate health of the report service's collaborators."""

    def __init__(self, report_service: ReportService) -> None:
        """Configure the resource with the report service."""
        self._report_service = report_service

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /api/v1/health.

        The envelope's ``success`` flag mirrors overall health so clients
        that only inspect the envelope still see degradation.
        """
        status = await self._report_service.health_check()
        body = success(status.to_dict(), status.message)
        body["success"] = status.healthy
        resp.media = body
        resp.status = (
            HTTPStatus.OK if status.healthy else HTTPStatus.SERVICE_UNAVAILABLE
        )
