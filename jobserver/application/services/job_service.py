"""
Job service orchestrator.

Turns an untrusted submission into a persisted, dispatch-ready job and
serves read-only lookups.

Submission runs strictly as validate → save → publish; a failure at any
stage stops the later ones, so an unsaved job is never dispatched.

Dependencies: jobserver.core
System role: Job submission use case orchestration
"""

import logging
from typing import Any, Sequence

from jobserver.core.dispatch import DispatchChannel
from jobserver.core.exceptions import ProjectNotFoundError, UserNotFoundError
from jobserver.core.job import Job, Payload
from jobserver.core.ports import JobRepository, ProjectRegistry, UserRegistry

logger = logging.getLogger(__name__)


class JobService:
    """
    Job service orchestrator.

    Validates submissions against the user/project registries, persists
    new jobs through the repository and publishes their ids to the
    dispatch channel.
    """

    def __init__(
        self,
        repository: JobRepository,
        users: UserRegistry,
        projects: ProjectRegistry,
        channel: DispatchChannel,
    ) -> None:
        """
        Initialize job service.

        Args:
            repository: Job store
            users: User existence checks
            projects: Project existence checks
            channel: Dispatch channel feeding the workers
        """
        self.repository = repository
        self.users = users
        self.projects = projects
        self.channel = channel

    async def submit_job(
        self,
        user_id: int,
        project_id: int | None,
        parameters: Payload | dict[str, Any] | None = None,
    ) -> Job:
        """
        Validate, persist and dispatch a new job.

        Args:
            user_id: Submitting user (must exist)
            project_id: Optional project (must exist when given)
            parameters: Opaque payload for the processor; dicts are JSON encoded

        Returns:
            Job: The persisted job, status PENDING

        Raises:
            UserNotFoundError: Unknown user; nothing persisted or dispatched
            ProjectNotFoundError: Unknown project; nothing persisted or dispatched
            PersistenceError: Save failed; nothing dispatched
            DispatchError: Saved but the channel refused the id
        """
        if not await self.users.exists(user_id):
            logger.warning("Submission rejected: unknown user", extra={"user_id": user_id})
            raise UserNotFoundError(user_id)

        if project_id is not None and not await self.projects.exists(project_id):
            logger.warning(
                "Submission rejected: unknown project",
                extra={"user_id": user_id, "project_id": project_id},
            )
            raise ProjectNotFoundError(project_id)

        if not isinstance(parameters, Payload):
            parameters = Payload.from_object(parameters if parameters is not None else {})

        job = Job.new(user_id=user_id, project_id=project_id, parameters=parameters)
        saved = await self.repository.save(job)

        logger.info(f"Sending job {saved.id} to worker", extra={"job_id": saved.id})
        await self.channel.publish(saved.id)
        logger.info(f"Job {saved.id} sent to worker", extra={"job_id": saved.id})
        return saved

    async def get_job(self, job_id: str) -> Job | None:
        """
        Get a job by id.

        Args:
            job_id: Job id

        Returns:
            Job if found, None otherwise
        """
        return await self.repository.find_by_id(job_id)

    async def get_jobs_by_user(self, user_id: int) -> Sequence[Job]:
        """
        Get a user's jobs, newest first.

        Args:
            user_id: User id

        Returns:
            Sequence of jobs, empty when the user has none
        """
        return await self.repository.find_by_user_id(user_id)
