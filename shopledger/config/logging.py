"""
Structured logging configuration using structlog.

structlog events and records from stdlib loggers (uvicorn, aiosqlite) go
through one ProcessorFormatter, so both render the same way: JSON lines in
production, colored console output during development.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from shopledger.config.settings import Settings, get_settings

# Amount-like event keys are rounded for readability; stored values are not
_MONEY_SUFFIXES = ("price", "cost", "total", "amount", "value")
_MONEY_DIGITS = 4

_QUIET_LOGGERS = ("aiosqlite", "uvicorn.access", "httpx", "httpcore")


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application and database context to log events."""
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment)
    event_dict.setdefault("db", settings.storage.db_name)
    return event_dict


def round_money(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Round float amounts such as buying_price or grand_total."""
    for key, value in event_dict.items():
        if isinstance(value, float) and key.endswith(_MONEY_SUFFIXES):
            event_dict[key] = round(value, _MONEY_DIGITS)
    return event_dict


def _renderer_chain(settings: Settings) -> list[Processor]:
    if settings.environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(force: bool = False) -> None:
    """Configure structlog and the stdlib root logger once per process."""
    if structlog.is_configured() and not force:
        return

    settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            round_money,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer_chain(settings),
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def bind_log_context(**values: Any) -> None:
    """Bind values (request_id, user) to every event in the current context."""
    structlog.contextvars.bind_contextvars(**values)
