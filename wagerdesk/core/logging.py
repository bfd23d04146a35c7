"""
Logging setup.

Service code logs through structlog:

    import structlog
    logger = structlog.get_logger()
    logger.info("transaction_created", transaction_id=str(tx.id))

Request-scoped keys (request_id) are bound by RequestIdMiddleware and merged
into every event. Library loggers (uvicorn, sqlalchemy, the access log) go
through the stdlib logging module at the same level.
"""

import logging
import sys

import structlog

from wagerdesk.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
