"""ASGI lifespan middleware for the service's long-lived resources.

``DatabaseLifecycle`` creates the student tables when the server starts
and disposes of the engine's connection pool when it stops.
``StudentClientLifecycle`` closes the students API client on shutdown.

Usage
-----
::

    engine = create_async_engine(database_url)
    client = HttpStudentDataClient(StudentApiConfig.from_env())
    app = falcon.asgi.App(
        middleware=[DatabaseLifecycle(engine), StudentClientLifecycle(client)]
    )

"""

from __future__ import annotations

import typing as typ

from reportcard.logging import get_logger, log_info
from reportcard.students.storage import init_student_storage

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from reportcard.client import HttpStudentDataClient

__all__ = ["DatabaseLifecycle", "StudentClientLifecycle"]

logger = get_logger(__name__)


class DatabaseLifecycle:
    """Falcon middleware tying the student database to the ASGI lifespan.

    Parameters
    ----------
    engine
        Async engine bound to the students database.

    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize the middleware with an engine."""
        self._engine = engine

    async def process_startup(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Create missing student tables."""
        await init_student_storage(self._engine)
        log_info(logger, "Student storage initialised")

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Release pooled database connections."""
        await self._engine.dispose()


class StudentClientLifecycle:
    """Falcon middleware closing the students API client at shutdown."""

    def __init__(self, client: HttpStudentDataClient) -> None:
        """Initialize the middleware with the client it owns."""
        self._client = client

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Close the client's HTTP connections."""
        await self._client.aclose()
        log_info(logger, "Students API client closed")
