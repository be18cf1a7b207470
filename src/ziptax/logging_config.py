"""Structured logging configuration using structlog.

The SDK only emits events through ``structlog.get_logger``; applications
decide where they go. ``configure_logging`` is a convenience for scripts and
examples. It attaches one handler to the ``ziptax`` logger and leaves the
root logger and other libraries alone.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, WrappedLogger

SDK_LOGGER_NAME = "ziptax"
HANDLER_NAME = "ziptax-structlog"


def add_sdk_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the SDK name."""
    event_dict.setdefault("sdk", "ziptax-python")
    return event_dict


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Send SDK events to stdout.

    Calling it again replaces the handler installed by the previous call.

    Args:
        log_level: Logging level for the ``ziptax`` logger
        environment: "production" selects JSON lines, anything else the console renderer
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    if environment.lower() == "production":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        exc_processors: list[structlog.types.Processor] = [structlog.processors.format_exc_info]
    else:
        renderer = structlog.dev.ConsoleRenderer()
        exc_processors = []

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            add_sdk_context,
            *exc_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))

    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    for existing in [h for h in sdk_logger.handlers if h.get_name() == HANDLER_NAME]:
        sdk_logger.removeHandler(existing)
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(level)
    sdk_logger.propagate = False
