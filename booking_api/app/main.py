"""
Main entrypoint for the Booking Platform API.

This module assembles the FastAPI application: it sets up logging,
registers CORS middleware, mounts the user and booking routers under
``/api`` and exposes a plain-text liveness probe at ``/``.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, so it can be served by
any ASGI server, e.g.::

    uvicorn booking_api.app.main:app

When served that way the database connection is opened during the
lifespan startup phase.  ``booking_api.app.server`` instead connects
before binding the port and exits with status 1 if that fails.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .api.router import router as api_router
from .core.config import Settings, get_settings
from .core.db import ConnectionState, DatabaseConnector, init_db
from .core.logging_config import setup_logging


LIVENESS_TEXT = "✅ Backend Running..."

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    connector: DatabaseConnector = app.state.connector
    # The server entry point may already have connected.
    if connector.state is ConnectionState.DISCONNECTED:
        await connector.connect()
        await init_db(connector.database)
    yield
    await connector.close()


def create_app(
    settings: Optional[Settings] = None,
    connector: Optional[DatabaseConnector] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the process-wide settings
        read from the environment.
    connector : Optional[DatabaseConnector]
        Database connector shared by all route handlers.  When omitted
        a new, not yet connected, connector is built from
        ``settings``.  Tests pass a fake here.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    if connector is None:
        connector = DatabaseConnector(
            settings.mongo_url,
            default_db=settings.db_name,
            server_selection_timeout_ms=settings.server_selection_timeout_ms,
        )

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.connector = connector

    # Credentials cannot be combined with the wildcard origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def liveness() -> str:
        return LIVENESS_TEXT

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
