"""Logging for the SAR gateway.

Application modules keep using ``logging.getLogger(__name__)``; structlog sits
on top of the stdlib root logger and renders every record either as one JSON
object per line (default, for log shippers) or as coloured console output.
Per-request access records go through a dedicated structlog logger so they
carry method, path, status and timing as separate keys.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from sarweb.config.settings import ObservabilitySettings

ACCESS_LOGGER_NAME = "sarweb.access"

# The Elasticsearch client logs every HTTP round trip at INFO, which would
# repeat each access record with the cluster URL in it.
_NOISY_LOGGERS = ("elastic_transport.transport", "elastic_transport.node_pool")


def setup_logging(settings: ObservabilitySettings | None = None) -> None:
    """Install structlog rendering over the root logger.

    Args:
        settings: ``log_level`` and ``log_format`` (``json`` or ``console``).
            Falls back to INFO and JSON when omitted.
    """
    level_name = settings.log_level.upper() if settings else "INFO"
    level = getattr(logging, level_name, logging.INFO)
    as_json = not settings or settings.log_format != "console"

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if as_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    client_level = level if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)


def get_access_logger() -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(ACCESS_LOGGER_NAME)
