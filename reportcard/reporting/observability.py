"""Structured lifecycle events for report generation.

``ReportService`` calls these hooks at the start, end and failure of each
report so operators can follow a report through the pipeline.

Usage
-----
>>> event_logger = ReportEventLogger()
>>> event_logger.log_report_started(student_id=42, generated_by="admin1")

"""

from __future__ import annotations

import enum
import typing as typ

from reportcard.logging import get_logger, log_error, log_info, log_warning

if typ.TYPE_CHECKING:
    import datetime as dt

    from reportcard.reporting.models import ReportResult

logger = get_logger(__name__)


class ReportEventType(enum.StrEnum):
    """Structured log event types for report generation."""

    REPORT_STARTED = "reporting.report.started"
    REPORT_COMPLETED = "reporting.report.completed"
    REPORT_FAILED = "reporting.report.failed"
    SIZE_PROBE_FAILED = "reporting.report.size_probe_failed"


class ReportEventLogger:
    """Emit structured report lifecycle events via femtologging."""

    def log_report_started(self, *, student_id: object, generated_by: str) -> None:
        """Log the start of a report request."""
        log_info(
            logger,
            "[%s] student_id=%s generated_by=%s",
            ReportEventType.REPORT_STARTED,
            student_id,
            generated_by,
        )

    def log_report_completed(
        self,
        *,
        result: ReportResult,
        duration: dt.timedelta,
    ) -> None:
        """Log a rendered report with its size and elapsed time.

        Parameters
        ----------
        result
            The assembled report result.
        duration
            Elapsed time from request start to result assembly.

        """
        log_info(
            logger,
            "[%s] report_id=%s student_id=%d file_path=%s file_size=%d "
            "duration_seconds=%.3f",
            ReportEventType.REPORT_COMPLETED,
            result.report_id,
            result.student_id,
            result.file_path,
            result.file_size,
            duration.total_seconds(),
        )

    def log_report_failed(
        self,
        *,
        student_id: object,
        error: BaseException,
        stage: str,
        duration: dt.timedelta,
    ) -> None:
        """Log a failed report with the stage that failed.

        Parameters
        ----------
        student_id
            Identifier the caller asked for.
        error
            Raised exception.
        stage
            Pipeline stage (``validate``, ``fetch``, ``render``).
        duration
            Elapsed time between request start and failure.

        """
        log_error(
            logger,
            "[%s] student_id=%s stage=%s duration_seconds=%.3f "
            "error_type=%s error_message=%s",
            ReportEventType.REPORT_FAILED,
            student_id,
            stage,
            duration.total_seconds(),
            type(error).__name__,
            str(error),
        )

    def log_size_probe_failed(self, *, file_path: str, error: BaseException) -> None:
        """Log an artifact whose size could not be read."""
        log_warning(
            logger,
            "[%s] file_path=%s error_type=%s error_message=%s",
            ReportEventType.SIZE_PROBE_FAILED,
            file_path,
            type(error).__name__,
            str(error),
        )
