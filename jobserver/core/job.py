"""
Job record and lifecycle state machine.

Job lifecycle: PENDING → PROCESSING → COMPLETED | FAILED
PENDING is the only initial state. COMPLETED and FAILED are terminal;
no transition leaves them and there is no retry back to PENDING.

Dependencies: None (pure domain layer)
System role: Job entity shared by the service, the worker and the ports
"""

import enum
import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, FrozenSet

from jobserver.core.exceptions import InvalidTransitionError

JSON_ENCODING = "application/json"


class JobStatus(str, enum.Enum):
    """
    Job execution states.

    PENDING: Persisted and published, awaiting a worker
    PROCESSING: Claimed by a worker; external call in flight
    COMPLETED: External processor succeeded; result is set
    FAILED: A step of the processing chain failed; error_message is set
    """

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


TERMINAL_STATES: FrozenSet[JobStatus] = frozenset({
    JobStatus.COMPLETED,
    JobStatus.FAILED,
})

_TRANSITIONS: dict[JobStatus, FrozenSet[JobStatus]] = {
    JobStatus.PENDING: frozenset({JobStatus.PROCESSING}),
    JobStatus.PROCESSING: frozenset({JobStatus.COMPLETED, JobStatus.FAILED}),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.FAILED: frozenset(),
}


def is_terminal(status: JobStatus) -> bool:
    """Return True if no transition can leave ``status``."""
    return status in TERMINAL_STATES


def can_transition(source: JobStatus, target: JobStatus) -> bool:
    """Return True if ``source -> target`` is a legal lifecycle step."""
    return target in _TRANSITIONS[source]


def validate_transition(
    source: JobStatus,
    target: JobStatus,
    job_id: str | None = None,
) -> None:
    """
    Ensure ``source -> target`` is a legal lifecycle step.

    Args:
        source: Current status
        target: Requested status
        job_id: Optional job id for error context

    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    if not can_transition(source, target):
        raise InvalidTransitionError(job_id, source.value, target.value)


def allowed_sources(target: JobStatus) -> FrozenSet[JobStatus]:
    """
    Statuses from which ``target`` may be entered.

    Used by stores to make status writes conditional (compare-and-set).
    Empty for PENDING, which is only ever set at creation.
    """
    return frozenset(
        source for source, targets in _TRANSITIONS.items() if target in targets
    )


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Payload:
    """
    Opaque structured payload tagged with its encoding.

    The core never looks inside; only the edges (API, processor client)
    encode and decode.
    """

    content: str
    encoding: str = JSON_ENCODING

    @classmethod
    def from_object(cls, obj: Any) -> "Payload":
        """Serialise a JSON-compatible object into a payload."""
        return cls(content=json.dumps(obj, separators=(",", ":"), sort_keys=True))

    def to_object(self) -> Any:
        """
        Decode a JSON payload back into Python objects.

        Raises:
            ValueError: If the payload is not JSON encoded
        """
        if self.encoding != JSON_ENCODING:
            raise ValueError(f"Cannot decode payload with encoding {self.encoding!r}")
        return json.loads(self.content)


@dataclass(frozen=True)
class JobResult(Payload):
    """External processor response; embedded in a Job, no identity of its own."""


@dataclass
class Job:
    """
    Unit of submitted work tracked through the lifecycle.

    Attributes:
        id: UUID4 string, assigned before the first write, never changes
        user_id: Submitting principal
        project_id: Optional project reference
        status: Current lifecycle state
        parameters: Caller payload, passed unmodified to the processor
        result: Processor payload; only set when COMPLETED
        error_message: Failure reason; only set when FAILED
        created_at: Creation time (UTC), immutable
        updated_at: Last mutation time (UTC), never before created_at
    """

    id: str
    user_id: int
    project_id: int | None
    status: JobStatus
    parameters: Payload
    created_at: datetime
    updated_at: datetime
    result: JobResult | None = None
    error_message: str | None = None

    @classmethod
    def new(
        cls,
        user_id: int,
        project_id: int | None,
        parameters: Payload,
    ) -> "Job":
        """Build a fresh PENDING job with a generated id and equal timestamps."""
        now = utc_now()
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            project_id=project_id,
            status=JobStatus.PENDING,
            parameters=parameters,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self.status)
