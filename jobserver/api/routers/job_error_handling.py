"""
Job API error handling.

Decorator mapping service-layer exceptions onto the `{"error": ...}`
response body used by every job endpoint.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from jobserver.core.exceptions import JobNotFoundError, ValidationError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def handle_job_errors(func: F) -> F:
    """
    Decorator turning job errors into JSON error responses.

    - ValidationError → 400 with the validation message
    - JobNotFoundError → 404
    - anything else → 500 with a generic message (details only in the log)
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ValidationError as e:
            logger.warning("Invalid job request", extra={"error": str(e), "field": e.details.get("field")})
            return error_response(status.HTTP_400_BAD_REQUEST, str(e))

        except JobNotFoundError as e:
            logger.info("Job not found", extra={"job_id": e.job_id})
            return error_response(status.HTTP_404_NOT_FOUND, str(e))

        except Exception as e:
            logger.exception(
                f"Unhandled error in {func.__name__}",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    return wrapper  # type: ignore[return-value]
