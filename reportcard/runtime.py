"""reportcard runtime entrypoint.

Builds the ASGI application from environment variables and serves it with
Granian. Routes are enabled by configuration:

- ``REPORTCARD_DATABASE_URL``: enables the ``/students`` backend routes.
- ``REPORTCARD_STUDENT_API_URL``: enables the ``/api/v1`` report routes.
- ``REPORTCARD_HOST``: Bind address (default ``0.0.0.0``)
- ``REPORTCARD_PORT``: Listen port (default ``8080``)
- ``REPORTCARD_LOG_LEVEL``: Log level (default ``INFO``)

Renderer settings are read by :class:`reportcard.rendering.RendererConfig`.

Run the service directly with ``python -m reportcard.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from reportcard.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301
    except ValueError as exc:
        log_error(
            logger,
            "Invalid REPORTCARD_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from the environment.

    Returns
    -------
    falcon.asgi.App
        Application with the routes enabled by the configured variables.

    """
    from reportcard.api.app import AppDependencies
    from reportcard.api.app import create_app as _create_api_app

    database_url = os.environ.get("REPORTCARD_DATABASE_URL", "").strip()
    student_api_url = os.environ.get("REPORTCARD_STUDENT_API_URL", "").strip()

    session_factory = None
    middleware: tuple[object, ...] = ()
    if database_url:
        from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

        from reportcard.api.middleware import DatabaseLifecycle

        engine = create_async_engine(database_url)
        session_factory = async_sessionmaker(engine, expire_on_commit=False)
        middleware = (DatabaseLifecycle(engine),)

    report_service = None
    if student_api_url:
        from reportcard.api.factory import build_report_service
        from reportcard.api.middleware import StudentClientLifecycle
        from reportcard.client import HttpStudentDataClient, StudentApiConfig

        student_client = HttpStudentDataClient(StudentApiConfig.from_env())
        report_service = build_report_service(student_client=student_client)
        middleware = (*middleware, StudentClientLifecycle(student_client))

    return _create_api_app(
        AppDependencies(
            session_factory=session_factory,
            report_service=report_service,
            middleware=middleware,
        )
    )


def main() -> None:
    """Start the reportcard server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("REPORTCARD_HOST", "0.0.0.0")  # noqa: S104
    port = _parse_port(os.environ.get("REPORTCARD_PORT", "8080"))
    log_level_str = os.environ.get("REPORTCARD_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid REPORTCARD_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting reportcard on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "reportcard.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
