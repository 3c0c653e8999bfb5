"""Errors raised by report renderers."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class RendererError(Exception):
    """Base class for renderer errors."""


class ReportRenderingError(RendererError):
    """Raised when a report document cannot be produced."""

    def __init__(self, student_id: int, reason: str) -> None:
        """Initialise with the student and a description of the failure."""
        self.student_id = student_id
        self.reason = reason
        super().__init__(
            f"could not render report for student {student_id}: {reason}"
        )


class ReportCleanupError(RendererError):
    """Raised when aged reports cannot be removed."""

    def __init__(self, output_dir: Path, reason: str) -> None:
        """Initialise with the report directory and failure reason."""
        self.output_dir = output_dir
        self.reason = reason
        super().__init__(f"could not clean up reports in {output_dir}: {reason}")
