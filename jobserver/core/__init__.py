"""
Job core: record, lifecycle state machine, ports and dispatch channel.

Pure domain layer; no framework or driver imports.
"""

from jobserver.core.dispatch import DispatchChannel, DispatchMessage, InMemoryDispatchChannel
from jobserver.core.job import Job, JobResult, JobStatus, Payload
from jobserver.core.ports import JobProcessor, JobRepository, ProjectRegistry, UserRegistry

__all__ = [
    "DispatchChannel",
    "DispatchMessage",
    "InMemoryDispatchChannel",
    "Job",
    "JobProcessor",
    "JobRepository",
    "JobResult",
    "JobStatus",
    "Payload",
    "ProjectRegistry",
    "UserRegistry",
]
