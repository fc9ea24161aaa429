"""
Structured logging for hosts embedding the consent kernel.

The kernel logs through module-level structlog loggers and never configures
logging itself. Until the host configures structlog, its defaults apply and
every event (``catalog_attached``, ``catalog_rebind_rejected``,
``field_rejected``) is printed to stdout. Call ``configure_logging`` once at
application start to route events through the standard library at a chosen
level.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, List, Optional

import structlog
from structlog.typing import EventDict, WrappedLogger


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO8601 timestamp to log entry."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_service_info(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["service"] = "consent-kernel"
    return event_dict


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines instead of console output
    """
    processors: List[Any] = [
        add_service_info,
        add_timestamp,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
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
        level=getattr(logging, level.upper()),
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    bound_logger: structlog.BoundLogger = structlog.get_logger(name)
    return bound_logger
