"""
Exception hierarchy for the job server.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class JobServerException(Exception):
    """Base exception for all job server errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return the human-readable message."""
        return self.message


class ValidationError(JobServerException):
    """Raised when caller input fails a precondition. Never retried."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class UserNotFoundError(ValidationError):
    """Raised when a submission references an unknown user."""

    def __init__(self, user_id: int) -> None:
        super().__init__(
            f"User not found: {user_id}",
            field="userId",
            details={"user_id": user_id},
        )


class ProjectNotFoundError(ValidationError):
    """Raised when a submission references an unknown project."""

    def __init__(self, project_id: int) -> None:
        super().__init__(
            f"Project not found: {project_id}",
            field="projectId",
            details={"project_id": project_id},
        )


class PersistenceError(JobServerException):
    """Raised when the job store rejects or fails a read/write."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        job_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            operation: Repository operation that failed (save, update_status, ...)
            job_id: Job the operation targeted
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if job_id:
            details["job_id"] = job_id
        super().__init__(message, details)


class RemoteProcessingError(JobServerException):
    """Raised when the external processor fails or returns an error status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class JobNotFoundError(JobServerException):
    """Raised when a dispatched job has no record in the store."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}", {"job_id": job_id})


class InvalidTransitionError(JobServerException):
    """Raised when a status change is not allowed by the lifecycle."""

    def __init__(self, job_id: str | None, source: str, target: str) -> None:
        super().__init__(
            f"Invalid status transition {source} -> {target}",
            {"job_id": job_id, "source": source, "target": target},
        )


class DispatchError(JobServerException):
    """Raised when a job identifier cannot be handed to the dispatch channel."""

    pass
