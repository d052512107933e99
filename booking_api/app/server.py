"""Process entry point for the Booking Platform API.

Startup runs in a fixed order: load settings, configure logging,
connect to MongoDB, create indexes, then bind the HTTP listener with
Uvicorn and serve until interrupted.  The listener is only bound once
the database has answered, and a failed connection terminates the
process with exit status 1.

Usage::

    python run.py
"""

import asyncio
import logging
import sys
from typing import Optional

from uvicorn import Config, Server

from .core.config import Settings, get_settings
from .core.db import DatabaseConnectionError, DatabaseConnector, init_db
from .core.logging_config import setup_logging, uvicorn_log_level
from .main import create_app


logger = logging.getLogger(__name__)


class ApiServer(Server):
    """Uvicorn server that confirms the listening address once it is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        # Unset when the lifespan startup failed; a failed bind exits instead.
        if self.started:
            logger.info("Server running on http://localhost:%d", self.config.port)


async def serve(settings: Optional[Settings] = None) -> None:
    """Connect to the database and serve the API on ``settings.port``."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    connector = DatabaseConnector(
        settings.mongo_url,
        default_db=settings.db_name,
        server_selection_timeout_ms=settings.server_selection_timeout_ms,
    )
    try:
        await connector.connect()
    except DatabaseConnectionError:
        # The connector has already logged the cause.
        sys.exit(1)
    await init_db(connector.database)

    app = create_app(settings, connector=connector)
    # log_config=None keeps uvicorn on the handlers set up by setup_logging.
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        log_level=uvicorn_log_level(settings.log_level),
        log_config=None,
    )
    server = ApiServer(config)
    await server.serve()


def run() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass
