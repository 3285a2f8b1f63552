"""
Observability module.

Provides logging configuration, correlation ID tracking and HTTP middleware.
"""

from jobserver.observability.logger import configure_logging

__all__ = ["configure_logging"]
