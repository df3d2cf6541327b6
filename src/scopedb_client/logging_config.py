"""
Opt-in structlog setup for applications embedding the client.

Modules in this package only log through ``structlog.get_logger``; nothing
is configured on import. ``configure_logging`` routes those events to the
stdlib ``scopedb_client`` logger with a level and renderer taken from
Settings (LOG_LEVEL, ENVIRONMENT). ``ScopeDBClient.from_settings`` calls it
when ``SCOPEDB_CONFIGURE_LOGGING`` is true.

Usage:
    from scopedb_client.config import Settings
    from scopedb_client.logging_config import configure_logging

    configure_logging(Settings(LOG_LEVEL="DEBUG", ENVIRONMENT="production"))
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from scopedb_client.client.exceptions import ScopeDBError
from scopedb_client.config import Settings, get_settings

LOGGER_NAME = "scopedb_client"
HANDLER_NAME = "scopedb_client"


def endpoint_context(endpoint: str) -> Processor:
    """Build a processor stamping each event with the client and its endpoint."""

    def _add(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("client", "scopedb")
        event_dict.setdefault("endpoint", endpoint)
        return event_dict

    return _add


def error_fields(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Flatten a logged ScopeDBError into ``error_kind`` / ``error_details``."""
    error = event_dict.get("exc_info")
    if error is True:
        error = sys.exc_info()[1]
    elif isinstance(error, tuple):
        error = error[1]
    if isinstance(error, ScopeDBError):
        event_dict["error_kind"] = error.kind
        event_dict["error_details"] = dict(error.details)
    return event_dict


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Route client log events to stdout.

    Only the ``scopedb_client`` logger tree gets a handler; the root logger
    is left alone. Calling this again replaces the handler installed by the
    previous call.

    Args:
        settings: Source of LOG_LEVEL, ENVIRONMENT and ENDPOINT
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    is_production = settings.ENVIRONMENT.lower() == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        endpoint_context(settings.ENDPOINT),
        error_fields,
    ]

    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors)
    )

    client_logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in client_logger.handlers if h.get_name() == HANDLER_NAME]:
        client_logger.removeHandler(existing)
    client_logger.addHandler(handler)
    client_logger.setLevel(level)
    client_logger.propagate = False

    # per-request lines from the HTTP stack only when debugging
    http_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(http_level)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=settings.ENVIRONMENT,
        renderer="json" if is_production else "console",
    )
