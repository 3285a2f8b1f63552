"""
Job processing Celery task.

Task: process_job(job_id)
Flow: claim -> load -> external call -> store result -> COMPLETED
(failures recorded as FAILED), via JobWorker.

Each task run gets its own event loop, so the database engine and HTTP
client are built per run and released before the loop closes.

Dependencies: celery, jobserver.workers, jobserver.api.deps
System role: Broker-backed job processing task
"""

import asyncio
import logging

from jobserver.boundary.queue.celery_channel import PROCESS_JOB_TASK
from jobserver.core.job import JobStatus
from jobserver.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


async def _process(job_id: str) -> JobStatus | None:
    from jobserver.api.deps.dependencies import ServiceCache

    services = ServiceCache()
    try:
        return await services.worker.process(job_id)
    finally:
        await services.aclose()


@celery_app.task(name=PROCESS_JOB_TASK, bind=True, ignore_result=True)
def process_job(self, job_id: str) -> str | None:
    """
    Run the processing chain for one job.

    Args:
        job_id: Job id published by the API

    Returns:
        str | None: Status the job was left in, None if it was dropped
    """
    logger.info(f"Celery task {self.request.id} picked up job {job_id}", extra={"job_id": job_id})
    status = asyncio.run(_process(job_id))
    return status.value if status is not None else None
