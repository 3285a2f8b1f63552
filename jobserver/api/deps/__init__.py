"""API dependencies."""

from jobserver.api.deps.dependencies import ServiceCache, get_job_service, get_service_cache

__all__ = ["ServiceCache", "get_job_service", "get_service_cache"]
