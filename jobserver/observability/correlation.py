"""
Correlation ID context manager.

Manages correlation ID propagation across async boundaries using contextvars.
HTTP requests carry their own id; workers use the job id.

Dependencies: contextvars
System role: Request and job tracing across service boundaries
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
import uuid

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        str: The correlation ID that was set
    """
    value = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    """
    Get current correlation ID from context.

    Returns:
        str: Current correlation ID (empty string when unset)
    """
    return correlation_id_ctx.get()



@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of a block, then restore the previous one."""
    token = correlation_id_ctx.set(correlation_id or str(uuid.uuid4()))
    try:
        yield correlation_id_ctx.get()
    finally:
        correlation_id_ctx.reset(token)
