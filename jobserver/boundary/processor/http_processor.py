"""
HTTP client for the external job processor.

POSTs {"jobId": ...} to <PROCESSOR_URL>/process and wraps the JSON reply
as a JobResult. Any transport failure or error status becomes a
RemoteProcessingError; nothing is retried here.

Dependencies: httpx, jobserver.core
System role: External Processor Port adapter
"""

import json
import logging

import httpx

from jobserver.core.exceptions import RemoteProcessingError
from jobserver.core.job import Job, JobResult
from jobserver.core.ports import JobProcessor

logger = logging.getLogger(__name__)


def build_process_url(base_url: str) -> str:
    """Join the configured base URL and the process endpoint with exactly one slash."""
    return base_url.rstrip("/") + "/process"


class HttpJobProcessor(JobProcessor):
    """External processor reached over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize processor client.

        Args:
            base_url: Processor base URL; ``/process`` is appended
            timeout_seconds: Per-call timeout, None waits indefinitely
            client: Optional pre-built client (owned by the caller)
        """
        self.process_url = build_process_url(base_url)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))

    async def process(self, job: Job) -> JobResult:
        logger.info(
            f"Calling external API: {self.process_url} for job {job.id}",
            extra={"job_id": job.id},
        )
        try:
            response = await self._client.post(self.process_url, json={"jobId": job.id})
        except httpx.HTTPError as exc:
            logger.error(f"Failed to process job {job.id}: {exc}", extra={"job_id": job.id})
            raise RemoteProcessingError(str(exc) or type(exc).__name__) from exc

        if response.status_code >= 400:
            message = f"External API returned error: {response.status_code} - {response.text}"
            logger.error(f"Failed to process job {job.id}: {message}", extra={"job_id": job.id})
            raise RemoteProcessingError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteProcessingError(
                f"External API returned invalid JSON: {exc}",
                status_code=response.status_code,
            ) from exc

        logger.info(f"Job {job.id} processed successfully", extra={"job_id": job.id})
        return JobResult(content=json.dumps(body, separators=(",", ":"), sort_keys=True))

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
