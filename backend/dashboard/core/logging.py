"""Structured logging for the dashboard.

JSON lines by default; a readable console renderer when running with
``debug`` enabled.
"""

import logging

import structlog

# Per-request lines from the HTTP stack would drown the gateway events
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the standard library logger.

    :param log_level: Log level name; unknown names fall back to INFO
    :param json_logs: Render JSON lines instead of colored console output
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
