"""
Runtime configuration for the course relay.

Values come from the environment (optionally a .env file, see .env.example)
and are resolved once at startup, then passed to the handler explicitly.
"""

import logging
import os
import sys
from dataclasses import dataclass

DEFAULT_CANVAS_API_URL = "https://canvas.instructure.com"
DEFAULT_CORS_ORIGINS = ("chrome-extension://*", "http://127.0.0.1:*")


@dataclass(frozen=True)
class Settings:
    canvas_api_url: str = DEFAULT_CANVAS_API_URL
    canvas_api_key: str | None = None
    port: int = 5000
    request_timeout: float = 30
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"


def load_settings(environ=None) -> Settings:
    """Build Settings from environment variables (``os.environ`` by default)."""
    env = os.environ if environ is None else environ

    origins = tuple(
        o.strip() for o in env.get("CORS_ORIGINS", "").split(",") if o.strip()
    )
    return Settings(
        canvas_api_url=env.get("CANVAS_API_URL") or DEFAULT_CANVAS_API_URL,
        canvas_api_key=env.get("CANVAS_API_KEY") or None,
        port=int(env.get("PORT") or 5000),
        request_timeout=float(env.get("CANVAS_TIMEOUT") or 30),
        cors_origins=origins or DEFAULT_CORS_ORIGINS,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stdout with timestamps."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Reduce noise from the requests connection pool
    logging.getLogger("urllib3").setLevel(logging.WARNING)
