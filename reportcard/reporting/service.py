"""Report orchestrator turning a student identifier into a PDF report.

The service composes two collaborators: a student data client that fetches
records, and a renderer that persists documents. Each report request runs
as a straight sequence with no retries:

1. Validate the identifier
2. Fetch the student record
3. Build ``ReportMetadata``
4. Render the document
5. Probe the artifact size (best effort)
6. Assemble a ``ReportResult``

Usage
-----
>>> from reportcard.client import HttpStudentDataClient, StudentApiConfig
>>> from reportcard.rendering import PdfReportRenderer, RendererConfig
>>> from reportcard.reporting import ReportService, ReportServiceDependencies
>>>
>>> dependencies = ReportServiceDependencies(
...     student_client=HttpStudentDataClient(StudentApiConfig.from_env()),
...     renderer=PdfReportRenderer(RendererConfig.from_env()),
... )
>>> service = ReportService(dependencies)
>>> result = await service.generate_report(42, "admin1")

"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import typing as typ
from pathlib import Path

from reportcard.common.time import unix_timestamp, utcnow

from .errors import (
    DataFetchError,
    InvalidArgumentError,
    NotFoundError,
    RenderError,
    ReportServiceError,
)
from .models import (
    ComponentState,
    ComponentStatus,
    HealthStatus,
    ReportMetadata,
    ReportResult,
)
from .protocol import ReportRenderer

if typ.TYPE_CHECKING:
    import datetime as dt

    from reportcard.reporting.observability import ReportEventLogger
    from reportcard.reporting.protocol import StudentDataClient
    from reportcard.students.models import StudentRecord, StudentSummary

SERVICE_NAME = "Report Service"
STUDENT_API_COMPONENT = "student_api"
RENDERER_COMPONENT = "report_renderer"

ALL_HEALTHY_MESSAGE = "All systems operational"
DEGRADED_MESSAGE = "Some components are unhealthy"


@dc.dataclass(frozen=True, slots=True)
class ReportServiceDependencies:
    """Collaborators injected into ``ReportService``.

    Attributes
    ----------
    student_client
        Source of student records and its liveness probe.
    renderer
        Document renderer. ``None`` models an uninitialized renderer: health
        checks report it unhealthy and report generation fails.

    """

    student_client: StudentDataClient
    renderer: ReportRenderer | None = None


def format_report_id(student_id: int, generated_at: dt.datetime) -> str:
    """Return ``RPT-<studentID>-<unixTimestamp>`` for a generation time."""
    return f"RPT-{student_id}-{unix_timestamp(generated_at)}"


def _is_valid_student_id(student_id: object) -> bool:
    return (
        isinstance(student_id, int)
        and not isinstance(student_id, bool)
        and student_id > 0
    )


def _probe_size(file_path: str) -> int:
    return Path(file_path).stat().st_size


class ReportService:
    """Orchestrates student report generation and aggregate health.

    The service keeps no mutable state between calls, so concurrent
    requests for different students need no coordination here.
    """

    def __init__(
        self,
        dependencies: ReportServiceDependencies,
        *,
        event_logger: ReportEventLogger | None = None,
        clock: typ.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        """Configure the service with its collaborators.

        Parameters
        ----------
        dependencies
            Student data client and renderer.
        event_logger
            Optional structured logger for report lifecycle events.
        clock
            Source of aware "now" timestamps; defaults to UTC wall time.

        """
        self._student_client = dependencies.student_client
        self._renderer = dependencies.renderer
        self._event_logger = event_logger
        self._clock = clock

    def _log_event(self, event_method_name: str, **kwargs: typ.Any) -> None:  # noqa: ANN401
        if self._event_logger is None:
            return
        getattr(self._event_logger, event_method_name)(**kwargs)

    async def list_students(
        self, filters: typ.Mapping[str, str] | None = None
    ) -> list[StudentSummary]:
        """Return student summaries matching ``filters``.

        Filters are passed to the data client unchanged and results keep the
        client's ordering.

        Raises
        ------
        DataFetchError
            If the data client fails.

        """
        try:
            return await self._student_client.list_students(filters or {})
        except Exception as exc:  # noqa: BLE001
            raise DataFetchError.for_listing(exc) from exc

    async def generate_report(
        self, student_id: int, generated_by: str
    ) -> ReportResult:
        """Generate and describe a report for one student.

        Parameters
        ----------
        student_id
            Positive student identifier.
        generated_by
            Identifier of the requesting actor.

        Returns
        -------
        ReportResult
            Location, size and identifiers of the rendered report.

        Raises
        ------
        InvalidArgumentError
            If ``student_id`` is not a positive integer. No collaborator is
            called.
        DataFetchError
            If the data client fails.
        NotFoundError
            If the data client has no such student. The renderer is not
            called.
        RenderError
            If rendering fails or no renderer is configured.

        """
        started = self._clock()
        self._log_event(
            "log_report_started", student_id=student_id, generated_by=generated_by
        )
        try:
            result = await self._generate(student_id, generated_by)
        except ReportServiceError as exc:
            self._log_event(
                "log_report_failed",
                student_id=student_id,
                error=exc,
                stage=exc.stage,
                duration=self._clock() - started,
            )
            raise

        self._log_event(
            "log_report_completed", result=result, duration=self._clock() - started
        )
        return result

    async def _generate(self, student_id: int, generated_by: str) -> ReportResult:
        if not _is_valid_student_id(student_id):
            raise InvalidArgumentError(student_id)

        student = await self._fetch_student(student_id)

        generated_at = self._clock()
        metadata = ReportMetadata(
            generated_at=generated_at,
            generated_by=generated_by,
            report_id=format_report_id(student_id, generated_at),
        )

        file_path = await self._render(student, metadata)
        file_size = await self._artifact_size(file_path)

        return ReportResult(
            report_id=metadata.report_id,
            student_id=student_id,
            student_name=student.format_name(),
            file_path=file_path,
            generated_at=metadata.generated_at,
            generated_by=generated_by,
            file_size=file_size,
        )

    async def _fetch_student(self, student_id: int) -> StudentRecord:
        try:
            student = await self._student_client.get_student_by_id(student_id)
        except Exception as exc:  # noqa: BLE001
            raise DataFetchError.for_student(exc) from exc

        if student is None:
            raise NotFoundError(student_id)
        return student

    async def _render(self, student: StudentRecord, metadata: ReportMetadata) -> str:
        if self._renderer is None:
            raise RenderError.not_initialized()
        try:
            return await self._renderer.generate_student_report(student, metadata)
        except Exception as exc:  # noqa: BLE001
            raise RenderError.from_failure(exc) from exc

    async def _artifact_size(self, file_path: str) -> int:
        """Return the artifact size in bytes, or 0 when it cannot be read."""
        try:
            return await asyncio.to_thread(_probe_size, file_path)
        except (OSError, ValueError) as exc:
            self._log_event("log_size_probe_failed", file_path=file_path, error=exc)
            return 0

    async def _student_api_status(self) -> ComponentStatus:
        try:
            await self._student_client.health_check()
        except Exception as exc:  # noqa: BLE001
            return ComponentStatus(
                status=ComponentState.UNHEALTHY,
                message=str(exc) or type(exc).__name__,
            )
        return ComponentStatus(
            status=ComponentState.HEALTHY, message="API is responsive"
        )

    def _renderer_status(self) -> ComponentStatus:
        if isinstance(self._renderer, ReportRenderer):
            return ComponentStatus(
                status=ComponentState.HEALTHY, message="Generator is ready"
            )
        return ComponentStatus(
            status=ComponentState.UNHEALTHY, message="Generator not initialized"
        )

    async def health_check(self) -> HealthStatus:
        """Probe every collaborator and aggregate the results.

        Collaborator failures are recorded as component status; this method
        does not raise for them.
        """
        components = {
            STUDENT_API_COMPONENT: await self._student_api_status(),
            RENDERER_COMPONENT: self._renderer_status(),
        }
        healthy = all(component.healthy for component in components.values())
        return HealthStatus(
            service=SERVICE_NAME,
            healthy=healthy,
            message=ALL_HEALTHY_MESSAGE if healthy else DEGRADED_MESSAGE,
            timestamp=self._clock(),
            components=components,
        )

    async def cleanup_old_reports(self) -> int:
        """Delegate to the renderer's retention routine.

        The renderer's return value and exceptions pass through unchanged.

        Raises
        ------
        RenderError
            If no renderer is configured.

        """
        if self._renderer is None:
            raise RenderError.not_initialized()
        return await self._renderer.cleanup_old_reports()
