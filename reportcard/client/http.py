"""httpx implementation of the student data client.

The students API wraps every payload in a ``{success, data, message}``
envelope. This client unwraps it, decodes ``data`` into msgspec structs
and maps HTTP 404 on a single-student lookup to ``None``.
"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import httpx
import msgspec

from reportcard.logging import get_logger, log_debug
from reportcard.students.models import StudentRecord, StudentSummary

from .errors import StudentApiError, StudentApiResponseError

if typ.TYPE_CHECKING:
    from .config import StudentApiConfig

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400

T = typ.TypeVar("T")


def _unwrap_envelope(payload: object) -> object:
    """Return ``data`` from a successful envelope."""
    if not isinstance(payload, dict):
        raise StudentApiResponseError.missing("success")
    if payload.get("success") is not True:
        raise StudentApiError.unsuccessful(payload.get("message", "no message"))
    if "data" not in payload:
        raise StudentApiResponseError.missing("data")
    return payload["data"]


def _decode(data: object, target: type[T]) -> T:
    try:
        return msgspec.convert(data, target)
    except msgspec.ValidationError as exc:
        raise StudentApiResponseError.undecodable(str(exc)) from exc


class HttpStudentDataClient:
    """Student data client backed by the students HTTP API."""

    def __init__(
        self,
        config: StudentApiConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client; an injected ``http_client`` is not owned."""
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "User-Agent": config.user_agent,
                "Accept": "application/json",
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def _get(
        self, path: str, params: typ.Mapping[str, str] | None = None
    ) -> httpx.Response:
        log_debug(logger, "GET %s%s params=%s", self._base_url, path, params or {})
        return await self._client.get(
            f"{self._base_url}{path}", params=dict(params) if params else None
        )

    def _ensure_success(self, response: httpx.Response, path: str) -> None:
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise StudentApiError.http_error(response.status_code, path)

    async def list_students(
        self, filters: typ.Mapping[str, str]
    ) -> list[StudentSummary]:
        """Return students matching ``filters`` in API order."""
        path = "/students"
        response = await self._get(path, filters)
        self._ensure_success(response, path)
        data = _unwrap_envelope(response.json())
        return _decode(data, list[StudentSummary])

    async def get_student_by_id(self, student_id: int) -> StudentRecord | None:
        """Return one student, or ``None`` when the API answers 404."""
        path = f"/students/{student_id}"
        response = await self._get(path)
        if response.status_code == HTTPStatus.NOT_FOUND:
            return None
        self._ensure_success(response, path)
        data = _unwrap_envelope(response.json())
        if data is None:
            return None
        return _decode(data, StudentRecord)

    async def health_check(self) -> None:
        """Raise unless ``GET /health`` answers with a 2xx status."""
        path = "/health"
        response = await self._get(path)
        self._ensure_success(response, path)
