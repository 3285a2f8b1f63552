"""
Shared test fixtures and configuration for entire test suite.

Provides: temporary SQLite session factory, SQL-backed repository,
port mocks and job builders
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from jobserver.core.job import Job, JobResult, JobStatus, Payload
from jobserver.core.ports import JobProcessor, JobRepository, ProjectRegistry, UserRegistry


@pytest.fixture
async def session_factory(tmp_path):
    """
    Create a throwaway SQLite async database for testing.

    File-backed so every session gets its own connection, as with a
    real server; concurrent writers wait on SQLite's lock.

    Yields:
        async_sessionmaker: Factory bound to a fresh schema (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import NullPool
    from jobserver.boundary.db.create_tables import create_all_tables, drop_all_tables

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'jobs.db'}",
        poolclass=NullPool,
    )

    await create_all_tables(engine)

    factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    yield factory

    await drop_all_tables(engine)

    await engine.dispose()


@pytest.fixture
def repository(session_factory):
    """SQL-backed job repository over the temporary database."""
    from jobserver.boundary.db.job_repository import SqlAlchemyJobRepository

    return SqlAlchemyJobRepository(session_factory)


@pytest.fixture
def make_job():
    """Build PENDING jobs with JSON parameters."""

    def _make(user_id: int = 1, project_id: int | None = None, **parameters) -> Job:
        return Job.new(
            user_id=user_id,
            project_id=project_id,
            parameters=Payload.from_object(parameters),
        )

    return _make


@pytest.fixture
def mock_repository() -> AsyncMock:
    """JobRepository mock; every update applies by default."""
    repo = AsyncMock(spec=JobRepository)
    repo.save.side_effect = lambda job: job
    repo.update_status.return_value = True
    repo.update_result.return_value = True
    repo.update_failure.return_value = True
    return repo


@pytest.fixture
def mock_processor() -> AsyncMock:
    """JobProcessor mock answering {"status": "success"}."""
    processor = AsyncMock(spec=JobProcessor)
    processor.process.return_value = JobResult(content='{"status":"success"}')
    return processor


@pytest.fixture
def mock_users() -> AsyncMock:
    users = AsyncMock(spec=UserRegistry)
    users.exists.return_value = True
    return users


@pytest.fixture
def mock_projects() -> AsyncMock:
    projects = AsyncMock(spec=ProjectRegistry)
    projects.exists.return_value = True
    return projects
