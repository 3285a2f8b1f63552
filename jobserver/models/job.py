"""
Job API schemas.

Request/response schemas for job submission and lookup. Field names are
camelCase on the wire.

Dependencies: pydantic, jobserver.core
System role: Job HTTP API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jobserver.core.job import JSON_ENCODING, Job, JobStatus, Payload


def payload_to_wire(payload: Payload | None) -> Any:
    """Decode JSON payloads; other encodings are returned as raw text."""
    if payload is None:
        return None
    if payload.encoding == JSON_ENCODING:
        return payload.to_object()
    return payload.content


class ErrorResponse(BaseModel):
    """Error body for rejected or failed requests."""

    error: str


class JobSubmitRequest(BaseModel):
    """Request schema for job submission."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", description="Submitting user")
    project_id: int | None = Field(default=None, alias="projectId", description="Optional project")
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque parameters forwarded to the processor",
    )


class JobSubmitResponse(BaseModel):
    """Response schema for an accepted submission."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")
    status: JobStatus

    @classmethod
    def from_job(cls, job: Job) -> "JobSubmitResponse":
        return cls(job_id=job.id, status=job.status)


class JobDetailResponse(BaseModel):
    """Response schema for a single job."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")
    status: JobStatus
    user_id: int = Field(alias="userId")
    project_id: int | None = Field(alias="projectId")
    parameters: Any
    result: Any = None
    error: str | None = None

    @classmethod
    def from_job(cls, job: Job) -> "JobDetailResponse":
        return cls(
            job_id=job.id,
            status=job.status,
            user_id=job.user_id,
            project_id=job.project_id,
            parameters=payload_to_wire(job.parameters),
            result=payload_to_wire(job.result),
            error=job.error_message,
        )


class JobSummary(BaseModel):
    """Entry in a user's job listing."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")
    status: JobStatus
    user_id: int = Field(alias="userId")
    project_id: int | None = Field(alias="projectId")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_job(cls, job: Job) -> "JobSummary":
        return cls(
            job_id=job.id,
            status=job.status,
            user_id=job.user_id,
            project_id=job.project_id,
            created_at=job.created_at,
        )
