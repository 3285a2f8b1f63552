"""
Job CRUD operations.

Provides Create, Read, Update operations for JobModel with job-specific
queries for per-user listing and conditional status transitions.

Dependencies: sqlalchemy, jobserver.boundary.db.models.job_model
System role: Job persistence operations
"""

from datetime import datetime
from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobserver.boundary.db.models.job_model import JobModel
from jobserver.boundary.db.CRUD.base_crud import BaseCRUD
from jobserver.core.job import JobStatus

MAX_ERROR_LENGTH = 2000


class JobCRUD(BaseCRUD[JobModel]):
    """
    CRUD operations for JobModel.

    Extends BaseCRUD with per-user listing and single-row updates that
    each refresh ``updated_at``.
    """

    def __init__(self) -> None:
        """Initialize JobCRUD with JobModel."""
        super().__init__(JobModel)

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: int,
    ) -> Sequence[JobModel]:
        """
        Retrieve a user's jobs, newest first.

        Args:
            session: Async database session
            user_id: Submitting user

        Returns:
            Sequence of JobModels ordered by created_at descending
        """
        stmt = (
            select(JobModel)
            .where(JobModel.user_id == user_id)
            .order_by(JobModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_status(
        self,
        session: AsyncSession,
        id: str,
        status: JobStatus,
        expected: Iterable[JobStatus],
        updated_at: datetime,
    ) -> bool:
        """
        Compare-and-set the job status.

        Args:
            session: Async database session
            id: Job id
            status: New status
            expected: Statuses the row must currently hold
            updated_at: Mutation timestamp

        Returns:
            True if the row matched and was updated
        """
        expected = list(expected)
        if not expected:
            return False
        rowcount = await self.update_by_id(
            session,
            id,
            JobModel.status.in_(expected),
            status=status,
            updated_at=updated_at,
        )
        return rowcount > 0

    async def update_result(
        self,
        session: AsyncSession,
        id: str,
        content: str,
        encoding: str,
        updated_at: datetime,
    ) -> bool:
        """
        Store the processor result and clear the error message.

        Returns:
            True if the job exists and was updated
        """
        rowcount = await self.update_by_id(
            session,
            id,
            result=content,
            result_encoding=encoding,
            error_message=None,
            updated_at=updated_at,
        )
        return rowcount > 0

    async def update_failure(
        self,
        session: AsyncSession,
        id: str,
        error_message: str,
        updated_at: datetime,
    ) -> bool:
        """
        Store the failure reason and clear the result.

        Messages longer than MAX_ERROR_LENGTH are truncated.

        Returns:
            True if the job exists and was updated
        """
        rowcount = await self.update_by_id(
            session,
            id,
            error_message=error_message[:MAX_ERROR_LENGTH],
            result=None,
            result_encoding=None,
            updated_at=updated_at,
        )
        return rowcount > 0


job_crud = JobCRUD()
