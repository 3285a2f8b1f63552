"""
Job API endpoints.

Routes:
- POST /jobs - Submit a job (202, dispatched to a worker)
- GET /jobs/user/{user_id} - List a user's jobs, newest first
- GET /jobs/{job_id} - Get a single job

Dependencies: jobserver.application.services, jobserver.models
System role: Job submission and status HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from jobserver.api.deps.dependencies import get_job_service
from jobserver.api.routers.job_error_handling import handle_job_errors
from jobserver.application.services.job_service import JobService
from jobserver.core.exceptions import JobNotFoundError
from jobserver.models.job import (
    ErrorResponse,
    JobDetailResponse,
    JobSubmitRequest,
    JobSubmitResponse,
    JobSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=JobSubmitResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses=ERROR_RESPONSES,
)
@handle_job_errors
async def submit_job(
    request: JobSubmitRequest,
    job_service: JobService = Depends(get_job_service),
) -> JobSubmitResponse:
    """
    Submit a job for asynchronous processing.

    The job is stored as PENDING and handed to a worker; poll
    GET /jobs/{jobId} for the outcome.

    Args:
        request: JobSubmitRequest with userId, optional projectId, parameters
        job_service: Injected JobService

    Returns:
        JobSubmitResponse: New job id and its PENDING status

    Raises:
        400: Unknown user or project
        500: Storage or dispatch failure
    """
    job = await job_service.submit_job(
        user_id=request.user_id,
        project_id=request.project_id,
        parameters=request.parameters,
    )
    return JobSubmitResponse.from_job(job)


@router.get("/user/{user_id}", response_model=list[JobSummary], responses={500: {"model": ErrorResponse}})
@handle_job_errors
async def list_user_jobs(
    user_id: int,
    job_service: JobService = Depends(get_job_service),
) -> list[JobSummary]:
    """List a user's jobs, newest first (empty when they have none)."""
    jobs = await job_service.get_jobs_by_user(user_id)
    return [JobSummary.from_job(job) for job in jobs]


@router.get(
    "/{job_id}",
    response_model=JobDetailResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@handle_job_errors
async def get_job(
    job_id: str,
    job_service: JobService = Depends(get_job_service),
) -> JobDetailResponse:
    """
    Get a job's status, parameters and outcome.

    Args:
        job_id: Job id returned by POST /jobs
        job_service: Injected JobService

    Returns:
        JobDetailResponse: Job details; result or error once terminal

    Raises:
        404: Job not found
    """
    job = await job_service.get_job(job_id)
    if job is None:
        raise JobNotFoundError(job_id)
    return JobDetailResponse.from_job(job)
