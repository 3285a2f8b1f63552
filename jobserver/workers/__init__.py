"""
Job workers.

In-process worker pool and the Celery task wrapping the same chain.

Dependencies: jobserver.core, celery (tasks only)
System role: Background job processing
"""

from jobserver.workers.job_worker import JobWorker, WorkerPool, describe_error

__all__ = ["JobWorker", "WorkerPool", "describe_error"]
