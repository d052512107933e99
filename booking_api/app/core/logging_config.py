"""
Logging setup shared by the API and the Uvicorn server.

All output goes through the root logger: ``setup_logging`` attaches a
console handler (plus an optional file handler) to it and routes
Uvicorn's own loggers there as well, so startup, access and
application records share one format and one level.  Uvicorn must then
be started with ``log_config=None`` so it does not install its own
handlers on top.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_UVICORN_LEVELS = {"critical", "error", "warning", "info", "debug"}


def resolve_level(level: str) -> int:
    """Map a level name such as ``"debug"`` or ``"WARN"`` to its number.

    Unknown names fall back to ``INFO``.
    """
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def uvicorn_log_level(level: str) -> str:
    """Return the name Uvicorn's ``Config`` expects for ``level``."""
    name = logging.getLevelName(resolve_level(level)).lower()
    return name if name in _UVICORN_LEVELS else "info"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and hand Uvicorn's loggers to it.

    Root handlers are only attached when none exist yet, so repeated
    calls (tests, several ``create_app`` calls) do not duplicate
    output.  The Uvicorn loggers are always reset: their handlers are
    dropped and records propagate to the root logger at ``level``.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.
    logfile : Optional[str]
        Path of a file receiving the same records as the console.
    """
    numeric_level = resolve_level(level)
    root = logging.getLogger()

    if not root.handlers:
        root.setLevel(numeric_level)
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

        if logfile:
            file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(numeric_level)
