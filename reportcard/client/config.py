"""Configuration for the HTTP student data client."""

from __future__ import annotations

import dataclasses
import os

from .errors import StudentApiConfigError


@dataclasses.dataclass(frozen=True, slots=True)
class StudentApiConfig:
    """Connection settings for the students API.

    Attributes
    ----------
    base_url
        Root URL of the students API, for example ``http://backend:5007``.
    timeout_s
        Per-request timeout in seconds.
    user_agent
        ``User-Agent`` header sent with every request.

    """

    base_url: str
    timeout_s: float = 10.0
    user_agent: str = "reportcard/0.1"

    @classmethod
    def from_env(cls) -> StudentApiConfig:
        """Build configuration from ``REPORTCARD_STUDENT_API_*`` variables.

        Raises
        ------
        StudentApiConfigError
            If the base URL is unset or the timeout is invalid.

        """
        base_url = os.environ.get("REPORTCARD_STUDENT_API_URL", "").strip()
        if not base_url:
            raise StudentApiConfigError.missing_base_url()

        raw_timeout = os.environ.get("REPORTCARD_STUDENT_API_TIMEOUT", "").strip()
        if not raw_timeout:
            return cls(base_url=base_url)
        try:
            timeout_s = float(raw_timeout)
        except ValueError as exc:
            raise StudentApiConfigError.invalid_timeout(raw_timeout) from exc
        if timeout_s <= 0:
            raise StudentApiConfigError.invalid_timeout(raw_timeout)
        return cls(base_url=base_url, timeout_s=timeout_s)
