import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from eventlog.application.api.v1.errors import PROBLEM_CONTENT_TYPE, map_event_log_error
from eventlog.application.api.v1.routes import events
from eventlog.application.di import create_container
from eventlog.config import Config, configure_logging
from eventlog.domain.event.port.snapshot_provider import SnapshotProvider
from eventlog.domain.shared.error import EventLogError
from eventlog.infrastructure.persistence.database import create_schema
from eventlog.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    snapshot_provider: SnapshotProvider | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Settings; read from the environment when omitted.
        snapshot_provider: The application's snapshot source; snapshots are
            empty when omitted.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s v%s", config.server.name, config.server.version)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container = app.state.dishka_container

        if config.database.create_schema:
            engine = await container.get(AsyncEngine)
            await create_schema(engine)

        yield

        await container.close()

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    if config.server.instrument:
        logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config, snapshot_provider)
    setup_dishka(container, app_instance)

    app_instance.include_router(events.router, prefix="/api/v1")

    # Global event log error handler - maps domain and infrastructure errors to problem responses
    @app_instance.exception_handler(EventLogError)
    async def event_log_error_handler(request: Request, exc: EventLogError):
        http_exc = map_event_log_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            media_type=PROBLEM_CONTENT_TYPE,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"code": "INTERNAL_ERROR", "message": "Internal server error"},
            media_type=PROBLEM_CONTENT_TYPE,
        )

    return app_instance
