"""Structured logging with structlog.

Configures JSON logging for production and colorized console for dev, and
binds a per-request ``request_id`` into structlog's context so every event
emitted while serving a request carries it.

Usage:
    import structlog
    logger = structlog.get_logger()
    logger.info("report_emailed", transactions=12)
"""

import logging
import sys
import time
import uuid

import structlog
from fastapi import Request

REQUEST_ID_HEADER = "X-Request-ID"


def setup_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Python log level string (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, use JSON renderer (production). If False,
                     use colorized console renderer (development).
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


async def request_context_middleware(request: Request, call_next):
    """Tag the request with an id and log its outcome.

    The id is taken from the incoming ``X-Request-ID`` header when present,
    stored on ``request.state`` for the error handlers, and echoed back.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = request_id

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    logger = structlog.get_logger()
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request_completed",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
