"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from reportcard.students import StudentService, init_student_storage

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path,
) -> typ.AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Yield a fresh async session factory backed by SQLite."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'reportcard_test.db'}"
    )
    try:
        await init_student_storage(engine)
        yield async_sessionmaker(engine, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def student_service(
    session_factory: async_sessionmaker[AsyncSession],
) -> StudentService:
    """Return a StudentService bound to the test database."""
    return StudentService(session_factory)
