"""Logging for the storefront.

Standard library logging carries the records and structlog shapes them:
JSON lines in production and staging, a coloured console view elsewhere.

Two scopes are layered on the structlog context:

* the HTTP request (``bind_request_context``), bound by the app middleware
  and echoed back to the caller in the ``X-Request-ID`` header;
* the cart being changed (``cart_context``), bound by ``CartStore`` around
  every command, so handler logs carry ``cart_id`` without passing it along.
"""

import logging
import os
import sys
import time
import uuid
from contextlib import contextmanager
from typing import Any

import structlog

REQUEST_ID_HEADER = "X-Request-ID"

LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

QUIET_LOGGERS = ("protean", "asyncio", "uvicorn.access")


def get_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, otherwise the level for the current environment."""
    return os.getenv("LOG_LEVEL", LEVELS_BY_ENVIRONMENT.get(get_environment(), "INFO")).upper()


def _renderer():
    if get_environment() in ("production", "staging"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def configure_logging() -> None:
    """Route everything to stdout and install the structlog pipeline."""
    level = get_log_level()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.contextvars.merge_contextvars,
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


# ---------------------------------------------------------------------------
# Request scope
# ---------------------------------------------------------------------------
def bind_request_context(method: str, path: str, request_id: str | None = None) -> str:
    """Start a fresh log context for one request and return its id.

    A caller-supplied id is kept so client and server logs line up.
    """
    clear_context()
    request_id = request_id or uuid.uuid4().hex
    add_context(request_id=request_id, method=method, path=path)
    return request_id


def elapsed_ms(started: float) -> float:
    """Milliseconds since ``started`` (a ``time.perf_counter()`` reading)."""
    return round((time.perf_counter() - started) * 1000, 2)


# ---------------------------------------------------------------------------
# Cart scope
# ---------------------------------------------------------------------------
@contextmanager
def cart_context(cart_id: str):
    """Bind ``cart_id`` for the duration of one cart operation."""
    with structlog.contextvars.bound_contextvars(cart_id=cart_id):
        yield
