"""API request/response schemas."""

from jobserver.models.job import (
    ErrorResponse,
    JobDetailResponse,
    JobSubmitRequest,
    JobSubmitResponse,
    JobSummary,
    payload_to_wire,
)

__all__ = [
    "ErrorResponse",
    "JobDetailResponse",
    "JobSubmitRequest",
    "JobSubmitResponse",
    "JobSummary",
    "payload_to_wire",
]
