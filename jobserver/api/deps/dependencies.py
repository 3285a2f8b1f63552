"""
Dependency injection container.

ServiceCache builds the long-lived collaborators (engine, repository,
processor client, registries, dispatch channel, worker pool) from
settings and tears them down at shutdown. FastAPI routes receive the
JobService through get_job_service.

Dependencies: jobserver.configs, jobserver.application, jobserver.boundary, jobserver.workers
System role: DI container for service injection
"""

import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from jobserver.application.services import JobService
from jobserver.boundary.db import SqlAlchemyJobRepository, get_async_engine, get_async_session_factory
from jobserver.boundary.processor import HttpJobProcessor
from jobserver.boundary.registry import StaticRegistry
from jobserver.configs import Settings, get_settings
from jobserver.core.dispatch import DispatchChannel, InMemoryDispatchChannel
from jobserver.workers import JobWorker, WorkerPool

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._engine = None
        self._session_factory = None
        self._repository = None
        self._processor = None
        self._users = None
        self._projects = None
        self._channel = None
        self._worker_pool = None

    @property
    def engine(self) -> AsyncEngine:
        """Get cached database engine."""
        if self._engine is None:
            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get cached session factory."""
        if self._session_factory is None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def repository(self) -> SqlAlchemyJobRepository:
        """Get cached job repository."""
        if self._repository is None:
            self._repository = SqlAlchemyJobRepository(self.session_factory)
        return self._repository

    @property
    def processor(self) -> HttpJobProcessor:
        """Get cached external processor client."""
        if self._processor is None:
            self._processor = HttpJobProcessor(
                base_url=self.settings.processor.url,
                timeout_seconds=self.settings.processor.timeout_seconds,
            )
        return self._processor

    @property
    def users(self) -> StaticRegistry:
        if self._users is None:
            self._users = StaticRegistry(self.settings.registry.user_ids)
        return self._users

    @property
    def projects(self) -> StaticRegistry:
        if self._projects is None:
            self._projects = StaticRegistry(self.settings.registry.project_ids)
        return self._projects

    @property
    def channel(self) -> DispatchChannel:
        """Get cached dispatch channel for the configured backend."""
        if self._channel is None:
            if self.settings.worker.dispatch_backend == "celery":
                # Lazy import so the in-process setup never needs a broker config
                from jobserver.boundary.queue import CeleryDispatchChannel
                from jobserver.workers.celery_app import celery_app

                self._channel = CeleryDispatchChannel(
                    celery_app,
                    queue=self.settings.celery.queue_name,
                )
            else:
                self._channel = InMemoryDispatchChannel()
        return self._channel

    @property
    def worker(self) -> JobWorker:
        """Build a worker over the cached repository and processor."""
        return JobWorker(repository=self.repository, processor=self.processor)

    @property
    def worker_pool(self) -> WorkerPool | None:
        """Get cached worker pool; None when jobs run in Celery workers."""
        if self._worker_pool is None and isinstance(self.channel, InMemoryDispatchChannel):
            self._worker_pool = WorkerPool(
                channel=self.channel,
                worker=self.worker,
                instances=self.settings.worker.instances,
                shutdown_grace_seconds=self.settings.worker.shutdown_grace_seconds,
            )
        return self._worker_pool

    @property
    def job_service(self) -> JobService:
        return JobService(
            repository=self.repository,
            users=self.users,
            projects=self.projects,
            channel=self.channel,
        )

    async def aclose(self) -> None:
        """Stop workers and release connections."""
        if self._worker_pool is not None:
            await self._worker_pool.stop()
        if self._channel is not None:
            await self._channel.close()
        if self._processor is not None:
            await self._processor.aclose()
        if self._engine is not None:
            await self._engine.dispose()
        self.clear()
        logger.info("Service cache closed")

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._repository = None
        self._processor = None
        self._users = None
        self._projects = None
        self._channel = None
        self._worker_pool = None


def get_service_cache(request: Request) -> ServiceCache:
    """Get the service cache built by the application lifespan."""
    return request.app.state.services


def get_job_service(request: Request) -> JobService:
    """
    Get job service instance.

    Args:
        request: Current request (carries the application's service cache)

    Returns:
        JobService: Job service instance
    """
    return get_service_cache(request).job_service
