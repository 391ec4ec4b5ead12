"""structlog wiring for the analytics core.

Importing marketpulse never touches logging configuration. The embedding
dashboard calls ``setup_logging`` once; library modules only ever call
``get_logger`` and emit snake_case events with key/value context.
"""

import logging
import os
from decimal import Decimal

import structlog


def _stringify_decimals(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Render Decimal values as plain strings so JSON output keeps full precision."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
    return event_dict


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Route structlog events through the stdlib root logger.

    Args:
        log_level: Root level name. Unknown names fall back to INFO.
        log_format: "json" or "console". None defers to the LOG_FORMAT
            environment variable, then to "console".
    """
    fmt = (log_format or os.environ.get("LOG_FORMAT", "console")).lower()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _stringify_decimals,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(fmt),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return the structlog logger for module ``name``."""
    return structlog.get_logger(name)
