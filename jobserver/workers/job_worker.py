"""
Job worker and in-process worker pool.

JobWorker runs the processing chain for one job id:
claim (PENDING → PROCESSING) → load → external call → store result → COMPLETED.
The first failing step short-circuits into the failure path:
store error message → FAILED. Failure-path errors are logged and the job
is left in the last status it reached; nothing is retried.

WorkerPool runs several workers as asyncio tasks competing for messages
on an InMemoryDispatchChannel.

Dependencies: asyncio, jobserver.core, jobserver.observability
System role: Background job processing
"""

import asyncio
import logging

from jobserver.core.dispatch import ChannelClosedError, DispatchMessage, InMemoryDispatchChannel
from jobserver.core.exceptions import (
    InvalidTransitionError,
    JobNotFoundError,
    PersistenceError,
)
from jobserver.core.job import JobStatus
from jobserver.core.ports import JobProcessor, JobRepository
from jobserver.observability.correlation import correlation_scope
from jobserver.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def describe_error(exc: BaseException) -> str:
    """Human-readable failure reason recorded on the job."""
    message = str(exc).strip()
    return message or type(exc).__name__


class JobWorker:
    """
    Runs the processing chain for a single job id at a time.

    Holds no state besides its ports, so any number of workers may run
    side by side against the same store.
    """

    def __init__(self, repository: JobRepository, processor: JobProcessor) -> None:
        """
        Initialize worker.

        Args:
            repository: Job store
            processor: External processor
        """
        self.repository = repository
        self.processor = processor

    async def handle(self, message: DispatchMessage) -> JobStatus | None:
        """Process a dispatch envelope."""
        return await self.process(message.job_id)

    async def process(self, job_id: str) -> JobStatus | None:
        """
        Drive one job through the processing chain.

        Args:
            job_id: Job id received from the dispatch channel

        Returns:
            The status this run left the job in, or None when the job was
            dropped without a status change (missing record, claim failure)
        """
        with correlation_scope(job_id):
            logger.info(f"Worker received job: {job_id}", extra={"job_id": job_id})

            try:
                claimed = await self.repository.update_status(job_id, JobStatus.PROCESSING)
            except PersistenceError as exc:
                log_exception_with_context(
                    logger, f"Could not claim job {job_id}; leaving it PENDING", exc, job_id=job_id
                )
                return None
            if not claimed:
                return await self._resolve_unclaimed(job_id)

            try:
                job = await self.repository.find_by_id(job_id)
                if job is None:
                    raise JobNotFoundError(job_id)

                logger.info(f"Processing job {job_id} with external service", extra={"job_id": job_id})
                result = await self.processor.process(job)

                logger.info(f"Job {job_id} processed, saving result", extra={"job_id": job_id})
                if not await self.repository.update_result(job_id, result):
                    raise JobNotFoundError(job_id)

                if not await self.repository.update_status(job_id, JobStatus.COMPLETED):
                    raise InvalidTransitionError(
                        job_id, JobStatus.PROCESSING.value, JobStatus.COMPLETED.value
                    )
            except Exception as exc:
                return await self._fail(job_id, exc)

            logger.info(f"Job {job_id} completed successfully", extra={"job_id": job_id})
            return JobStatus.COMPLETED

    async def _resolve_unclaimed(self, job_id: str) -> JobStatus | None:
        # The claim only misses when the row is gone or no longer PENDING
        try:
            job = await self.repository.find_by_id(job_id)
        except PersistenceError as exc:
            log_exception_with_context(logger, f"Could not load job {job_id}", exc, job_id=job_id)
            return None

        if job is None:
            logger.error(f"Job not found: {job_id}; dropping message", extra={"job_id": job_id})
            return None

        logger.warning(
            f"Job {job_id} already {job.status.value}; ignoring duplicate delivery",
            extra={"job_id": job_id, "status": job.status.value},
        )
        return job.status

    async def _fail(self, job_id: str, exc: BaseException) -> JobStatus | None:
        error_message = describe_error(exc)
        logger.error(
            f"Job {job_id} failed: {error_message}",
            extra={"job_id": job_id, "error_type": type(exc).__name__},
        )
        try:
            await self.repository.update_failure(job_id, error_message)
            if await self.repository.update_status(job_id, JobStatus.FAILED):
                return JobStatus.FAILED
        except Exception as cleanup_exc:
            log_exception_with_context(
                logger,
                f"Failed to update failure status for job {job_id}",
                cleanup_exc,
                job_id=job_id,
            )
        return None


class WorkerPool:
    """
    Fixed number of workers consuming an in-process dispatch channel.

    Each worker handles one job at a time; the pool as a whole processes
    up to ``instances`` jobs concurrently.
    """

    def __init__(
        self,
        channel: InMemoryDispatchChannel,
        worker: JobWorker,
        instances: int = 4,
        shutdown_grace_seconds: float = 10.0,
    ) -> None:
        if instances < 1:
            raise ValueError("instances must be at least 1")
        self.channel = channel
        self.worker = worker
        self.instances = instances
        self.shutdown_grace_seconds = shutdown_grace_seconds
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> int:
        """Number of worker tasks still alive."""
        return sum(1 for task in self._tasks if not task.done())

    async def start(self) -> None:
        """Spawn the worker tasks."""
        if self._tasks:
            return
        self._tasks = [
            asyncio.create_task(self._run(index), name=f"job-worker-{index}")
            for index in range(self.instances)
        ]
        logger.info(f"Deployed {self.instances} job worker instances")

    async def stop(self) -> None:
        """
        Close the channel and wait for workers to drain it.

        Workers still busy after the grace period are cancelled; their jobs
        stay in whatever status they last reached.
        """
        await self.channel.close()
        if not self._tasks:
            return
        _, pending = await asyncio.wait(self._tasks, timeout=self.shutdown_grace_seconds)
        for task in pending:
            task.cancel()
        if pending:
            logger.warning(f"Cancelled {len(pending)} busy job workers at shutdown")
            await asyncio.gather(*pending, return_exceptions=True)
        self._tasks = []
        logger.info("Job workers stopped")

    async def _run(self, index: int) -> None:
        """Receive and process messages until the channel closes."""
        while True:
            try:
                message = await self.channel.receive()
            except ChannelClosedError:
                break

            try:
                await self.worker.handle(message)
            except Exception:
                logger.exception(
                    f"Worker {index} crashed on job {message.job_id}",
                    extra={"job_id": message.job_id},
                )
