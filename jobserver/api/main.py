"""
FastAPI application with assembled routers.

Initializes the FastAPI app, wires the service cache into the lifespan
(schema creation, worker pool start/stop) and configures uvicorn.

Dependencies: fastapi, uvicorn, jobserver.api.routers, jobserver.api.deps
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jobserver.api.deps.dependencies import ServiceCache
from jobserver.boundary.db import create_all_tables
from jobserver.configs import get_settings
from jobserver.observability import configure_logging
from jobserver.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import health_router, jobs_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: optional schema creation, then start in-process workers.
    Shutdown: stop workers, close the processor client, dispose the engine.
    """
    services: ServiceCache = app.state.services
    configure_logging(services.settings.log_level)

    if services.settings.database.create_tables:
        await create_all_tables(services.engine)

    pool = services.worker_pool
    if pool is not None:
        await pool.start()
    else:
        logger.info("Dispatching jobs to Celery workers")

    yield

    await services.aclose()


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies in the API's error format."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning("Malformed request", extra={"path": request.url.path, "errors": len(errors)})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"{location}: {message}" if location else message},
    )


def create_app(services: ServiceCache | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        services: Service cache to serve from (built from settings if omitted)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = services.settings if services is not None else get_settings()

    app = FastAPI(
        title="Job Server API",
        description="Asynchronous job submission and tracking",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services or ServiceCache(settings)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Last added runs outermost: correlation id is set before request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router)
    app.include_router(jobs_router)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "jobserver.api.main:app",
        host=settings.http_host,
        port=settings.http_port,
    )
