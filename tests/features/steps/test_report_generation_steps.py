"""Behavioural coverage for report generation via the HTTP API.

Usage
-----
Run with pytest::

    pytest tests/features/steps/test_report_generation_steps.py

The students API is replaced by an in-memory client; reports are rendered
to PDF by the real renderer in a temporary directory.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import falcon.testing
from pytest_bdd import given, parsers, scenario, then, when

from reportcard.api.app import AppDependencies, create_app
from reportcard.rendering import PdfReportRenderer, RendererConfig
from reportcard.reporting import ReportService, ReportServiceDependencies
from tests.helpers.doubles import FakeStudentClient, make_student

if typ.TYPE_CHECKING:
    from falcon.testing.client import Result


class ReportContext(typ.TypedDict, total=False):
    """Mutable context shared between steps."""

    client: falcon.testing.TestClient
    data_client: FakeStudentClient
    output_dir: Path
    response: Result


def _build_context(data_client: FakeStudentClient, output_dir: Path) -> ReportContext:
    service = ReportService(
        ReportServiceDependencies(
            student_client=data_client,
            renderer=PdfReportRenderer(RendererConfig(output_dir=output_dir)),
        )
    )
    return {
        "client": falcon.testing.TestClient(
            create_app(AppDependencies(report_service=service))
        ),
        "data_client": data_client,
        "output_dir": output_dir,
    }


@scenario("../report_generation.feature", "Generate a report for a known student")
def test_generate_report_for_known_student() -> None:
    """Wrapper for pytest-bdd scenario."""


@scenario("../report_generation.feature", "Reject a non-positive student identifier")
def test_reject_non_positive_identifier() -> None:
    """Wrapper for pytest-bdd scenario."""


@scenario("../report_generation.feature", "Report a missing student")
def test_report_missing_student() -> None:
    """Wrapper for pytest-bdd scenario."""


@scenario(
    "../report_generation.feature", "Health degrades when the students API is down"
)
def test_health_degrades_when_api_down() -> None:
    """Wrapper for pytest-bdd scenario."""


@given(
    "a report API whose students API knows student 42",
    target_fixture="report_context",
)
def given_api_with_student(tmp_path: Path) -> ReportContext:
    """Serve a report API backed by a client that knows Ada."""
    data_client = FakeStudentClient(students={42: make_student(42)})
    return _build_context(data_client, tmp_path / "reports")


@given(
    "a report API whose students API is unreachable",
    target_fixture="report_context",
)
def given_api_with_unreachable_backend(tmp_path: Path) -> ReportContext:
    """Serve a report API whose client fails every health probe."""
    data_client = FakeStudentClient(health_error=ConnectionError("connection refused"))
    return _build_context(data_client, tmp_path / "reports")


@when(parsers.parse('I request a report for student {student_id:d} as "{actor}"'))
def when_request_report(
    report_context: ReportContext, student_id: int, actor: str
) -> None:
    """POST a report request for ``student_id``."""
    report_context["response"] = report_context["client"].simulate_post(
        f"/api/v1/students/{student_id}/report", json={"generatedBy": actor}
    )


@when("I check the report service health")
def when_check_health(report_context: ReportContext) -> None:
    """GET the aggregate health endpoint."""
    report_context["response"] = report_context["client"].simulate_get(
        "/api/v1/health"
    )


@then(parsers.parse("the response status is {status:d}"))
def then_response_status(report_context: ReportContext, status: int) -> None:
    """Assert the HTTP status code and the envelope's success flag."""
    response = report_context["response"]
    assert response.status_code == status, (
        f"expected status {status}, got {response.status_code}"
    )
    assert response.json["success"] is (status < 400), "envelope disagrees"


@then(parsers.parse('the report id starts with "{prefix}"'))
def then_report_id_prefix(report_context: ReportContext, prefix: str) -> None:
    """Assert the report id embeds the student identifier."""
    report_id = report_context["response"].json["data"]["report_id"]
    assert report_id.startswith(prefix), f"unexpected report id {report_id}"
    assert report_id.removeprefix(prefix).isdigit(), "expected a unix timestamp"


@then(parsers.parse('the report names the student "{name}"'))
def then_report_names_student(report_context: ReportContext, name: str) -> None:
    """Assert the formatted student name."""
    assert report_context["response"].json["data"]["student_name"] == name


@then("the report file exists and is a PDF")
def then_report_file_is_pdf(report_context: ReportContext) -> None:
    """Assert the described artifact is on disk with the reported size."""
    data = report_context["response"].json["data"]
    path = Path(data["file_path"])
    assert path.is_file(), f"missing report file {path}"
    assert path.read_bytes().startswith(b"%PDF")
    assert data["file_size"] == path.stat().st_size


@then("no student record was fetched")
def then_no_fetch(report_context: ReportContext) -> None:
    """Assert validation failed before the data client was called."""
    assert report_context["data_client"].fetch_calls == []


@then("no report file was written")
def then_no_file(report_context: ReportContext) -> None:
    """Assert the renderer was never reached."""
    output_dir = report_context["output_dir"]
    assert not output_dir.exists() or not any(output_dir.iterdir())


@then(parsers.parse('the "{component}" component is "{state}"'))
def then_component_state(
    report_context: ReportContext, component: str, state: str
) -> None:
    """Assert one component's health tag."""
    components = report_context["response"].json["data"]["components"]
    assert components[component]["status"] == state
