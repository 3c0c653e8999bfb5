"""HTTP client for the students API."""

from __future__ import annotations

from .config import StudentApiConfig
from .errors import StudentApiConfigError, StudentApiError, StudentApiResponseError
from .http import HttpStudentDataClient

__all__ = [
    "HttpStudentDataClient",
    "StudentApiConfig",
    "StudentApiConfigError",
    "StudentApiError",
    "StudentApiResponseError",
]
