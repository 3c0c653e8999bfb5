"""Report orchestration: generation pipeline, health and retention."""

from __future__ import annotations

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
from .observability import ReportEventLogger, ReportEventType
from .protocol import ReportRenderer, StudentDataClient
from .service import ReportService, ReportServiceDependencies, format_report_id

__all__ = [
    "ComponentState",
    "ComponentStatus",
    "DataFetchError",
    "HealthStatus",
    "InvalidArgumentError",
    "NotFoundError",
    "RenderError",
    "ReportEventLogger",
    "ReportEventType",
    "ReportMetadata",
    "ReportRenderer",
    "ReportResult",
    "ReportService",
    "ReportServiceDependencies",
    "ReportServiceError",
    "StudentDataClient",
    "format_report_id",
]
