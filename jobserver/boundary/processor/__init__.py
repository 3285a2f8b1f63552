"""External processor adapters."""

from jobserver.boundary.processor.http_processor import HttpJobProcessor

__all__ = ["HttpJobProcessor"]
