"""
SQLAlchemy-backed job repository.

Implements the JobRepository port on top of JobCRUD. Each call runs in
its own session and commits on success, so every write is a single-row
transaction; failures are rolled back and surfaced as PersistenceError.

Dependencies: sqlalchemy, jobserver.boundary.db.CRUD, jobserver.core
System role: Persistence adapter for the job core
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobserver.boundary.db.CRUD.job_crud import JobCRUD, job_crud
from jobserver.boundary.db.models.job_model import JobModel
from jobserver.core.exceptions import PersistenceError
from jobserver.core.job import JSON_ENCODING, Job, JobResult, JobStatus, Payload, allowed_sources, utc_now
from jobserver.core.ports import JobRepository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_domain(row: JobModel) -> Job:
    """Map a JobModel row to a Job record."""
    result = None
    if row.result is not None:
        result = JobResult(content=row.result, encoding=row.result_encoding or JSON_ENCODING)
    return Job(
        id=row.id,
        user_id=row.user_id,
        project_id=row.project_id,
        status=JobStatus(row.status),
        parameters=Payload(content=row.parameters, encoding=row.parameters_encoding),
        result=result,
        error_message=row.error_message,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlAlchemyJobRepository(JobRepository):
    """Job store backed by a relational database."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        crud: JobCRUD = job_crud,
    ) -> None:
        """
        Initialize repository.

        Args:
            session_factory: Factory producing one session per operation
            crud: Job CRUD helper
        """
        self.session_factory = session_factory
        self.crud = crud

    @asynccontextmanager
    async def _transaction(self, operation: str, job_id: str | None = None) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    f"{__name__}:{operation} - {type(e).__name__}: {e}",
                    extra={"job_id": job_id, "operation": operation},
                )
                raise PersistenceError(
                    f"Failed to {operation.replace('_', ' ')}: {e}",
                    operation=operation,
                    job_id=job_id,
                ) from e

    async def save(self, job: Job) -> Job:
        async with self._transaction("save", job.id) as session:
            await self.crud.create(
                session,
                id=job.id,
                user_id=job.user_id,
                project_id=job.project_id,
                status=job.status,
                parameters=job.parameters.content,
                parameters_encoding=job.parameters.encoding,
                created_at=job.created_at,
                updated_at=job.updated_at,
            )
        logger.info("Job saved", extra={"job_id": job.id, "user_id": job.user_id})
        return job

    async def find_by_id(self, job_id: str) -> Job | None:
        async with self._transaction("find_by_id", job_id) as session:
            row = await self.crud.get_by_id(session, job_id)
            return to_domain(row) if row is not None else None

    async def find_by_user_id(self, user_id: int) -> Sequence[Job]:
        async with self._transaction("find_by_user_id") as session:
            rows = await self.crud.get_by_user_id(session, user_id)
            return [to_domain(row) for row in rows]

    async def update_status(self, job_id: str, status: JobStatus) -> bool:
        async with self._transaction("update_status", job_id) as session:
            changed = await self.crud.update_status(
                session,
                job_id,
                status,
                expected=allowed_sources(status),
                updated_at=utc_now(),
            )
        if not changed:
            logger.warning(
                "Status update did not apply",
                extra={"job_id": job_id, "status": status.value},
            )
        return changed

    async def update_result(self, job_id: str, result: JobResult) -> bool:
        async with self._transaction("update_result", job_id) as session:
            return await self.crud.update_result(
                session,
                job_id,
                content=result.content,
                encoding=result.encoding,
                updated_at=utc_now(),
            )

    async def update_failure(self, job_id: str, error_message: str) -> bool:
        async with self._transaction("update_failure", job_id) as session:
            return await self.crud.update_failure(
                session,
                job_id,
                error_message=error_message,
                updated_at=utc_now(),
            )
