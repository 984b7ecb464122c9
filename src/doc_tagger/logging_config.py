"""Structured logging configuration using structlog.

JSON lines in production, pretty console output for development.
Standard library loggers (uvicorn, httpx) are routed through the same
processor chain so every record carries the request id and app name.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


APP_LOG_NAME = "doc-tagger"

# Libraries whose per-request chatter duplicates the client's own logs
QUIET_LOGGERS = ("httpx", "httpcore")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp every event with the service name."""
    event_dict.setdefault("app", APP_LOG_NAME)
    return event_dict


def _pre_chain(is_production: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer(is_production: bool) -> Processor:
    if is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _install_handler(formatter: logging.Formatter, level: int) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(level)

    root = logging.getLogger()
    # configure_logging() may run more than once (tests, reload)
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "production" selects JSON output; anything else the console renderer
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    is_production = environment.lower() == "production"

    pre_chain = _pre_chain(is_production)
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _install_handler(
        structlog.stdlib.ProcessorFormatter(processor=_renderer(is_production), foreign_pre_chain=pre_chain),
        level,
    )

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if is_production else "console",
    )
