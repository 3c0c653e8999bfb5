"""Error taxonomy for the report orchestrator.

Each error names the pipeline stage that failed. Collaborator failures are
chained with ``raise ... from`` and also exposed as ``cause``.
"""

from __future__ import annotations


class ReportServiceError(Exception):
    """Base class for report orchestrator errors."""

    stage: str = "report"


class InvalidArgumentError(ReportServiceError):
    """Raised when the caller supplies a malformed student identifier."""

    stage = "validate"

    def __init__(self, student_id: object) -> None:
        """Initialise with the rejected identifier."""
        self.student_id = student_id
        super().__init__(f"invalid student ID: {student_id}")


class DataFetchError(ReportServiceError):
    """Raised when the student data client fails."""

    stage = "fetch"

    def __init__(self, message: str, *, cause: BaseException) -> None:
        """Initialise with a stage description and the underlying failure."""
        self.cause = cause
        super().__init__(f"{message}: {cause}")

    @classmethod
    def for_student(cls, cause: BaseException) -> DataFetchError:
        """Return an error for a failed single-student fetch."""
        return cls("failed to fetch student data", cause=cause)

    @classmethod
    def for_listing(cls, cause: BaseException) -> DataFetchError:
        """Return an error for a failed student listing."""
        return cls("failed to fetch students list", cause=cause)


class NotFoundError(ReportServiceError):
    """Raised when the student data client has no record for an identifier."""

    stage = "fetch"

    def __init__(self, student_id: int) -> None:
        """Initialise with the requested identifier."""
        self.student_id = student_id
        super().__init__(f"student with ID {student_id} not found")


class RenderError(ReportServiceError):
    """Raised when the report renderer fails to produce an artifact."""

    stage = "render"

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        """Initialise with a description and the underlying failure, if any."""
        self.cause = cause
        text = f"{message}: {cause}" if cause is not None else message
        super().__init__(text)

    @classmethod
    def from_failure(cls, cause: BaseException) -> RenderError:
        """Return an error wrapping a renderer failure."""
        return cls("failed to generate PDF report", cause=cause)

    @classmethod
    def not_initialized(cls) -> RenderError:
        """Return an error for a service constructed without a renderer."""
        return cls("report generator not initialized")
