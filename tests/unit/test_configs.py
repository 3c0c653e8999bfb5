"""Unit tests for environment-driven configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from reportcard.client import StudentApiConfig, StudentApiConfigError
from reportcard.rendering import RendererConfig

_API_VARS = ("REPORTCARD_STUDENT_API_URL", "REPORTCARD_STUDENT_API_TIMEOUT")
_RENDERER_VARS = (
    "REPORTCARD_OUTPUT_DIR",
    "REPORTCARD_REPORT_RETENTION_DAYS",
    "REPORTCARD_SCHOOL_NAME",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration variables inherited from the host."""
    for name in (*_API_VARS, *_RENDERER_VARS):
        monkeypatch.delenv(name, raising=False)


class TestStudentApiConfig:
    """Tests for ``StudentApiConfig.from_env``."""

    def test_requires_base_url(self) -> None:
        """A missing base URL is a configuration error."""
        with pytest.raises(StudentApiConfigError, match="REPORTCARD_STUDENT_API_URL"):
            StudentApiConfig.from_env()

    def test_defaults_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only the base URL is required."""
        monkeypatch.setenv("REPORTCARD_STUDENT_API_URL", "http://backend:5007")

        config = StudentApiConfig.from_env()

        assert config.base_url == "http://backend:5007"
        assert config.timeout_s == pytest.approx(10.0)

    def test_reads_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Fractional timeouts are accepted."""
        monkeypatch.setenv("REPORTCARD_STUDENT_API_URL", "http://backend:5007")
        monkeypatch.setenv("REPORTCARD_STUDENT_API_TIMEOUT", "2.5")

        assert StudentApiConfig.from_env().timeout_s == pytest.approx(2.5)

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_rejects_invalid_timeout(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        """Timeouts must be positive numbers."""
        monkeypatch.setenv("REPORTCARD_STUDENT_API_URL", "http://backend:5007")
        monkeypatch.setenv("REPORTCARD_STUDENT_API_TIMEOUT", raw)

        with pytest.raises(StudentApiConfigError, match="positive number"):
            StudentApiConfig.from_env()


class TestRendererConfig:
    """Tests for ``RendererConfig.from_env``."""

    def test_defaults(self) -> None:
        """Unset variables keep the dataclass defaults."""
        config = RendererConfig.from_env()

        assert config == RendererConfig()
        assert config.retention_days == 30
        assert config.output_dir == Path("reports")

    def test_reads_all_variables(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Every variable overrides its default."""
        monkeypatch.setenv("REPORTCARD_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("REPORTCARD_REPORT_RETENTION_DAYS", "7")
        monkeypatch.setenv("REPORTCARD_SCHOOL_NAME", "Hill Valley High")

        config = RendererConfig.from_env()

        assert config.output_dir == tmp_path
        assert config.retention_days == 7
        assert config.school_name == "Hill Valley High"

    @pytest.mark.parametrize(
        ("raw", "message"),
        [("week", "must be an integer"), ("0", "must be positive")],
    )
    def test_rejects_invalid_retention(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, message: str
    ) -> None:
        """Retention must be a positive integer."""
        monkeypatch.setenv("REPORTCARD_REPORT_RETENTION_DAYS", raw)

        with pytest.raises(ValueError, match=message):
            RendererConfig.from_env()
