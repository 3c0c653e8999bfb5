"""Value types produced by the report orchestrator."""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import enum
import typing as typ

import msgspec


class ComponentState(enum.StrEnum):
    """Health tag for a single collaborator."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class ReportMetadata(msgspec.Struct, kw_only=True, frozen=True):
    """Per-call metadata handed to the renderer.

    Attributes
    ----------
    generated_at
        Aware UTC time at which generation started.
    generated_by
        Identifier of the actor requesting the report.
    report_id
        ``RPT-<studentID>-<unixTimestamp>`` derived from ``generated_at``.

    """

    generated_at: dt.datetime
    generated_by: str
    report_id: str


class ReportResult(msgspec.Struct, kw_only=True, frozen=True):
    """Description of a successfully rendered report.

    ``file_size`` is zero when the artifact size could not be determined.
    """

    report_id: str
    student_id: int
    student_name: str
    file_path: str
    generated_at: dt.datetime
    generated_by: str
    file_size: int

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-compatible mapping with an ISO-8601 timestamp."""
        return msgspec.to_builtins(self)


class ComponentStatus(msgspec.Struct, kw_only=True, frozen=True):
    """Status tag and message for one collaborator."""

    status: ComponentState
    message: str

    @property
    def healthy(self) -> bool:
        """Return whether the component reported healthy."""
        return self.status is ComponentState.HEALTHY


class HealthStatus(msgspec.Struct, kw_only=True, frozen=True):
    """Aggregate health across every collaborator at one point in time."""

    service: str
    healthy: bool
    message: str
    timestamp: dt.datetime
    components: dict[str, ComponentStatus]

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-compatible mapping with an ISO-8601 timestamp."""
        return msgspec.to_builtins(self)
