"""
Celery-backed dispatch channel.

Publishes job ids as `jobserver.process_job` tasks. The broker takes the
place of the in-process queue: any number of Celery worker processes
compete for the messages.

Dependencies: celery, jobserver.core
System role: Durable dispatch channel adapter
"""

import asyncio
import logging

from celery import Celery

from jobserver.core.dispatch import DispatchChannel
from jobserver.core.exceptions import DispatchError

logger = logging.getLogger(__name__)

PROCESS_JOB_TASK = "jobserver.process_job"


class CeleryDispatchChannel(DispatchChannel):
    """Dispatch channel sending one Celery task per job id."""

    def __init__(self, app: Celery, queue: str | None = None) -> None:
        """
        Initialize channel.

        Args:
            app: Celery application used to send tasks
            queue: Target queue (defaults to the app's default queue)
        """
        self.app = app
        self.queue = queue

    async def publish(self, job_id: str) -> None:
        # send_task talks to the broker synchronously
        try:
            await asyncio.to_thread(
                self.app.send_task,
                PROCESS_JOB_TASK,
                args=[job_id],
                queue=self.queue,
            )
        except Exception as e:
            logger.error(
                f"Failed to publish job {job_id}: {type(e).__name__}: {e}",
                extra={"job_id": job_id},
            )
            raise DispatchError(f"Failed to publish job {job_id}: {e}") from e
        logger.debug("Job published to broker", extra={"job_id": job_id, "queue": self.queue})
