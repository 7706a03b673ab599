# ruff: noqa: A005
"""Structured logging configuration.

structlog is configured once per process on top of the standard library
``logging`` module. Context bound with ``bind_request_context`` lives in
contextvars, so every asyncio task (one per HTTP request) sees only its own
request id, user id and client address.

Usage Example:
    from auditoria.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("User created", user_id=str(user.id))
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    merge_contextvars,
)

from auditoria.core.config import LogConfig, LogFormat

if TYPE_CHECKING:
    from auditoria.core.context import RequestContext

_configured = False


def _build_processors(config: LogConfig) -> list[Any]:
    processors: list[Any] = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if config.format == LogFormat.JSON:
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    elif config.format == LogFormat.CONSOLE:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.KeyValueRenderer())

    return processors


def configure_logging(config: LogConfig | None = None, force: bool = False) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        config: Logging configuration (loaded from settings when omitted)
        force: Reconfigure even if logging was already configured
    """
    global _configured  # noqa: PLW0603

    if _configured and not force:
        return

    if config is None:
        from auditoria.core.config import get_settings

        config = get_settings().logging

    structlog.configure(
        processors=_build_processors(config),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.level),
        force=force,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get structured logger instance.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


def bind_request_context(context: "RequestContext") -> None:
    """Bind the request context to every log line of the current task."""
    bind_contextvars(**context.as_log_context())


def clear_request_context() -> None:
    """Drop everything bound for the current task."""
    clear_contextvars()


__all__ = [
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_logger",
]
