"""Student API client errors."""

from __future__ import annotations


class StudentApiError(RuntimeError):
    """Raised when the students API returns an error response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, path: str) -> StudentApiError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"students API returned HTTP {status_code} for {path}",
            status_code=status_code,
        )

    @classmethod
    def unsuccessful(cls, message: object) -> StudentApiError:
        """Return an error for an envelope with ``success: false``."""
        return cls(f"students API reported failure: {message}")


class StudentApiResponseError(RuntimeError):
    """Raised when a students API response has an unexpected shape."""

    @classmethod
    def missing(cls, field: str) -> StudentApiResponseError:
        """Return an error for a missing envelope field."""
        return cls(f"students API response missing expected field: {field}")

    @classmethod
    def undecodable(cls, detail: str) -> StudentApiResponseError:
        """Return an error for data that does not match the student schema."""
        return cls(f"students API response could not be decoded: {detail}")


class StudentApiConfigError(RuntimeError):
    """Raised when the student API client configuration is invalid."""

    @classmethod
    def missing_base_url(cls) -> StudentApiConfigError:
        """Return an error when no base URL is configured."""
        return cls("REPORTCARD_STUDENT_API_URL is required for the students API")

    @classmethod
    def invalid_timeout(cls, raw: str) -> StudentApiConfigError:
        """Return an error for a non-numeric or non-positive timeout."""
        return cls(
            f"REPORTCARD_STUDENT_API_TIMEOUT must be a positive number, got: {raw!r}"
        )
