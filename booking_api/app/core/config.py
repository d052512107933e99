"""
Configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts against a local MongoDB without any setup.  Values are
resolved once at startup and the instance is frozen afterwards; no
component mutates configuration at runtime.

A ``.env`` file in the working directory is honoured through
``python-dotenv``.  Variables already present in the real environment
take precedence over the file.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv


DEFAULT_MONGO_URL = "mongodb://localhost:27017/bookingDB"
DEFAULT_PORT = 5000


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(part.strip() for part in raw.split(",") if part.strip())
    return origins or ("*",)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    mongo_url: str = DEFAULT_MONGO_URL
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"

    # Database used when ``mongo_url`` carries no path component.
    db_name: str = "bookingDB"

    # How long the driver waits for a reachable server before the
    # initial connection attempt is declared failed.
    server_selection_timeout_ms: int = 5000

    cors_origins: Tuple[str, ...] = field(default=("*",))

    log_level: str = "INFO"
    log_file: Optional[str] = None

    project_name: str = "Booking Platform API"
    api_version: str = "1.0.0"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from a mapping of environment variables.

        Parameters
        ----------
        environ : Optional[Mapping[str, str]]
            Source of variables.  Defaults to ``os.environ``.  Empty
            values are treated as unset, so ``PORT=`` falls back to the
            default port.

        Raises
        ------
        ValueError
            If an integer setting such as ``PORT`` cannot be parsed.
        """
        env = os.environ if environ is None else environ

        def get(name: str, default: str) -> str:
            value = env.get(name)
            return value if value else default

        return cls(
            mongo_url=get("MONGO_URL", DEFAULT_MONGO_URL),
            port=_parse_int("PORT", get("PORT", str(DEFAULT_PORT))),
            host=get("HOST", "0.0.0.0"),
            db_name=get("DB_NAME", "bookingDB"),
            server_selection_timeout_ms=_parse_int(
                "MONGO_TIMEOUT_MS", get("MONGO_TIMEOUT_MS", "5000")
            ),
            cors_origins=_split_origins(get("CORS_ORIGINS", "*")),
            log_level=get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE") or None,
            project_name=get("PROJECT_NAME", "Booking Platform API"),
            api_version=get("API_VERSION", "1.0.0"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading ``.env`` on first use."""
    load_dotenv(override=False)
    return Settings.from_env()
