"""
Ports to the external collaborators of the job core.

The service and the worker depend only on these interfaces; storage,
remote compute and user/project lookups live in the boundary layer.

Dependencies: jobserver.core.job
System role: Abstract interfaces consumed (not implemented) by the core
"""

from abc import ABC, abstractmethod
from typing import Sequence

from jobserver.core.job import Job, JobResult, JobStatus


class JobRepository(ABC):
    """
    Job store.

    Every operation targets a single job row and may raise PersistenceError.
    The core does not retry any of them.
    """

    @abstractmethod
    async def save(self, job: Job) -> Job:
        """Insert a newly created job and return it."""

    @abstractmethod
    async def find_by_id(self, job_id: str) -> Job | None:
        """Return the job, or None when no record matches."""

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Sequence[Job]:
        """Return the user's jobs ordered by created_at, newest first."""

    @abstractmethod
    async def update_status(self, job_id: str, status: JobStatus) -> bool:
        """
        Move the job to ``status`` if its current status allows it.

        Returns:
            True if the row changed, False if the job is missing or its
            current status does not permit the transition
        """

    @abstractmethod
    async def update_result(self, job_id: str, result: JobResult) -> bool:
        """Store the processor result and clear any error message."""

    @abstractmethod
    async def update_failure(self, job_id: str, error_message: str) -> bool:
        """Store the failure reason and clear any result."""


class JobProcessor(ABC):
    """Remote computation that performs the actual work of a job."""

    @abstractmethod
    async def process(self, job: Job) -> JobResult:
        """
        Run the job remotely.

        Raises:
            RemoteProcessingError: On transport failure or error status
        """


class UserRegistry(ABC):
    """User existence checks."""

    @abstractmethod
    async def exists(self, user_id: int) -> bool:
        ...


class ProjectRegistry(ABC):
    """Project existence checks."""

    @abstractmethod
    async def exists(self, project_id: int) -> bool:
        ...
