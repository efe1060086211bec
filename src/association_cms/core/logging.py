"""Structured logging for the content API.

structlog renders both our own events and stdlib records from libraries
(uvicorn, SQLAlchemy, python-i18n) through one ProcessorFormatter, so every
line carries the request id and the resolved request locale.

Usage:
    from association_cms.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("content_locale_fallback", locale="de-AT", fallback_locale="en")
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from association_cms.core.config import settings

# Too chatty at INFO for a content API
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "i18n")


def add_request_locale(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach the request locale unless the event already names one."""
    # association_cms.i18n logs through this module
    from association_cms.i18n.context import get_locale

    locale = get_locale()
    if locale is not None:
        event_dict.setdefault("request_locale", locale)
    return event_dict


def setup_logging(
    log_level: int | None = None,
    json_logs: bool | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Override for the root level (DEBUG when settings.DEBUG)
        json_logs: Override for JSON output (console rendering locally)
    """
    if log_level is None:
        log_level = logging.DEBUG if settings.DEBUG else logging.INFO
    if json_logs is None:
        json_logs = settings.ENVIRONMENT != "local"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_request_locale,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
        shared_processors.append(structlog.processors.dict_tracebacks)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
