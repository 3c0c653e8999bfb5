"""Unit tests for report value types, errors and student DTOs."""

from __future__ import annotations

import datetime as dt

import msgspec
import pytest

from reportcard.reporting import (
    DataFetchError,
    InvalidArgumentError,
    NotFoundError,
    RenderError,
    ReportRenderer,
    ReportResult,
    StudentDataClient,
    format_report_id,
)
from reportcard.students import StudentValidationError
from reportcard.students.models import StudentFilters, StudentInput, StudentSummary
from tests.helpers.doubles import FIXED_NOW, FakeRenderer, FakeStudentClient


class TestFormatReportId:
    """Report identifier formatting."""

    def test_uses_whole_unix_seconds(self) -> None:
        """The identifier embeds the truncated POSIX timestamp."""
        moment = dt.datetime(2024, 1, 1, tzinfo=dt.UTC)
        assert format_report_id(42, moment) == "RPT-42-1704067200"

    def test_offset_aware_times_are_normalised(self) -> None:
        """Equal instants in different zones give the same identifier."""
        utc = dt.datetime(2024, 1, 1, tzinfo=dt.UTC)
        plus_two = utc.astimezone(dt.timezone(dt.timedelta(hours=2)))
        assert format_report_id(7, utc) == format_report_id(7, plus_two)


class TestReportResult:
    """Serialization of ReportResult."""

    def test_to_dict_has_stable_field_names(self) -> None:
        """Keys match the documented result shape."""
        result = ReportResult(
            report_id="RPT-42-1",
            student_id=42,
            student_name="Ada Lovelace",
            file_path="/reports/42.pdf",
            generated_at=FIXED_NOW,
            generated_by="admin1",
            file_size=10240,
        )

        payload = result.to_dict()

        assert set(payload) == {
            "report_id",
            "student_id",
            "student_name",
            "file_path",
            "generated_at",
            "generated_by",
            "file_size",
        }
        assert payload["generated_at"].startswith("2024-07-08T09:30:00")
        assert payload["file_size"] == 10240


class TestErrors:
    """Error messages and stage tags."""

    def test_invalid_argument_message(self) -> None:
        """The rejected identifier appears in the message."""
        error = InvalidArgumentError(-1)
        assert str(error) == "invalid student ID: -1"
        assert error.stage == "validate"

    def test_not_found_message(self) -> None:
        """The missing identifier appears in the message."""
        assert str(NotFoundError(9)) == "student with ID 9 not found"

    def test_data_fetch_error_includes_cause(self) -> None:
        """The cause text is appended to the stage description."""
        error = DataFetchError.for_student(RuntimeError("timeout"))
        assert str(error) == "failed to fetch student data: timeout"

    def test_render_error_without_cause(self) -> None:
        """An uninitialized renderer has no underlying cause."""
        error = RenderError.not_initialized()
        assert error.cause is None
        assert str(error) == "report generator not initialized"


class TestProtocols:
    """Structural conformance of collaborator doubles."""

    def test_fakes_satisfy_protocols(self) -> None:
        """The test doubles are recognised as collaborators."""
        assert isinstance(FakeStudentClient(), StudentDataClient)
        assert isinstance(FakeRenderer(), ReportRenderer)

    def test_plain_object_is_not_a_renderer(self) -> None:
        """Objects lacking the renderer methods are rejected."""
        assert not isinstance(object(), ReportRenderer)


class TestStudentSummary:
    """Name formatting and wire shape of student summaries."""

    @pytest.mark.parametrize(
        ("middle_name", "expected"),
        [
            (None, "Ada Lovelace"),
            ("", "Ada Lovelace"),
            ("  ", "Ada Lovelace"),
            ("King", "Ada King Lovelace"),
        ],
    )
    def test_format_name(self, middle_name: str | None, expected: str) -> None:
        """Blank middle names do not leave double spaces."""
        student = StudentSummary(
            id=1, first_name="Ada", middle_name=middle_name, last_name="Lovelace"
        )
        assert student.format_name() == expected

    def test_decodes_camel_case_payload(self) -> None:
        """Wire payloads use camelCase keys."""
        student = msgspec.convert(
            {
                "id": 3,
                "firstName": "Alan",
                "lastName": "Turing",
                "className": "10",
                "systemAccess": True,
            },
            StudentSummary,
        )
        assert student.class_name == "10"
        assert student.system_access is True


class TestStudentInput:
    """Partial student input."""

    def test_supplied_fields_excludes_unset(self) -> None:
        """Only provided keys are reported, including explicit nulls."""
        data = msgspec.convert(
            {"firstName": "Ada", "middleName": None}, StudentInput
        )
        assert data.supplied_fields() == {"first_name": "Ada", "middle_name": None}


class TestStudentFilters:
    """Query-string filter parsing."""

    def test_maps_query_keys(self) -> None:
        """``className`` maps onto ``class_name`` and roll is parsed."""
        filters = StudentFilters.from_mapping(
            {"name": " ada ", "className": "5", "section": "", "roll": "12"}
        )
        assert filters == StudentFilters(name="ada", class_name="5", roll=12)

    def test_unknown_keys_are_ignored(self) -> None:
        """Unrecognised parameters do not filter."""
        assert StudentFilters.from_mapping({"page": "2"}) == StudentFilters()

    def test_non_numeric_roll_is_rejected(self) -> None:
        """A roll that is not an integer fails validation."""
        with pytest.raises(StudentValidationError) as excinfo:
            StudentFilters.from_mapping({"roll": "abc"})
        assert excinfo.value.field == "roll"

    @pytest.mark.parametrize("raw", ["9223372036854775808", "-1"])
    def test_unstorable_roll_is_rejected(self, raw: str) -> None:
        """A roll outside the database integer range fails validation."""
        with pytest.raises(StudentValidationError) as excinfo:
            StudentFilters.from_mapping({"roll": raw})
        assert excinfo.value.field == "roll"
