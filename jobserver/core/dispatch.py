"""
Dispatch channel between job submission and workers.

At-least-once, fire-and-forget delivery of job identifiers. Each published
identifier goes to exactly one consumer; consumers compete for messages.
There is no acknowledgement: a received message counts as delivered
whatever the processing outcome, and nothing survives a process crash.

Dependencies: asyncio (stdlib)
System role: Explicit message-passing channel owned by the process
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from jobserver.core.exceptions import DispatchError
from jobserver.core.job import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchMessage:
    """Internal envelope delivered once per publish to one worker."""

    job_id: str
    published_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, str]:
        return {"jobId": self.job_id}


class ChannelClosedError(DispatchError):
    """Raised when publishing to, or receiving from, a closed channel."""

    def __init__(self) -> None:
        super().__init__("Dispatch channel is closed")


class DispatchChannel(ABC):
    """Publish side of the channel, as seen by the job service."""

    @abstractmethod
    async def publish(self, job_id: str) -> None:
        """
        Hand a job identifier over for delivery.

        Returns once the identifier is accepted; does not wait for a worker.

        Raises:
            DispatchError: If the channel cannot accept the message
        """

    async def close(self) -> None:
        """Stop accepting messages."""


class InMemoryDispatchChannel(DispatchChannel):
    """
    Process-local channel backed by an unbounded asyncio.Queue.

    Workers call receive() concurrently; the queue hands each message to
    exactly one of them (load-balanced, not broadcast).
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[DispatchMessage | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        """Number of messages not yet received by any worker."""
        # A closed channel holds one wake-up sentinel
        return self._queue.qsize() - (1 if self._closed else 0)

    async def publish(self, job_id: str) -> None:
        if self._closed:
            raise ChannelClosedError()
        self._queue.put_nowait(DispatchMessage(job_id=job_id))
        logger.debug("Job published", extra={"job_id": job_id})

    async def receive(self) -> DispatchMessage:
        """
        Wait for the next message.

        Raises:
            ChannelClosedError: Once the channel is closed and drained
        """
        message = await self._queue.get()
        if message is None:
            # Wake the next waiting consumer too
            self._queue.put_nowait(None)
            raise ChannelClosedError()
        return message

    async def close(self) -> None:
        """Close the channel; waiting consumers are released once it drains."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)
        logger.info("Dispatch channel closed")
