"""Broker-backed dispatch channel adapters."""

from jobserver.boundary.queue.celery_channel import PROCESS_JOB_TASK, CeleryDispatchChannel

__all__ = ["PROCESS_JOB_TASK", "CeleryDispatchChannel"]
