"""Logging for the warehouse service.

Records go through the standard library root logger (stdout plus two
rotating files under ``LOG_DIR``); structlog renders them as JSON in
production and staging and as colored console lines elsewhere. Bulk runs bind
a ``batch_id`` with :func:`add_context` so every line of one batch can be
grepped together.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE_PREFIX = "warehouse"

_LEVELS = {"production": "INFO", "staging": "INFO", "development": "DEBUG", "test": "WARNING"}
_JSON_ENVIRONMENTS = ("production", "staging")


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    return handler


def configure_logging() -> None:
    """Wire stdlib handlers and structlog. Safe to call more than once."""
    environment = _environment()
    level = os.getenv("LOG_LEVEL", _LEVELS.get(environment, "INFO"))

    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_handler(log_dir / f"{LOG_FILE_PREFIX}.log", level),
        _rotating_handler(log_dir / f"{LOG_FILE_PREFIX}_error.log", logging.ERROR),
    ]
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    if environment in _JSON_ENVIRONMENTS:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values to every log line emitted until they are cleared."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context(*keys: str) -> None:
    """Unbind the given keys, or everything when called without keys."""
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
