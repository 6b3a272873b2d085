"""
Structured logging configuration using structlog.

One JSON object per line when LOG_FORMAT=json, colored console output
otherwise. Modules log through structlog.get_logger(__name__) with snake_case
event names and key-value context (symbol=, source=, count=).
"""

import logging
import sys

import structlog
from structlog.types import Processor

# Third-party loggers that are chatty at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "yfinance", "urllib3")


def _renderers(fmt: str) -> list[Processor]:
    if fmt == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(level: str = "INFO", fmt: str = "console") -> None:
    """
    Configure structlog and route it through the standard library.

    Args:
        level: stdlib level name; unknown names mean INFO.
        fmt:   "json" or "console".
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderers(fmt),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    # basicConfig is a no-op when the root logger already has handlers.
    logging.getLogger().setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
