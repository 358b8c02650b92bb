import logging
import logging.config
from typing import Any, Dict, Optional

import gevent
import structlog

DEFAULT_LOG_LEVEL = "INFO"

#: Debug levels at which additional details are logged.
LOG_RECEIPTS = 2
LOG_BYTECODE = 3


def add_greenlet_name(_logger: str, _method_name: str, event_dict: Dict[str, Any]):
    """Add greenlet_name to the event dict for greenlets that have a non-default name."""
    current_greenlet = gevent.getcurrent()
    greenlet_name = getattr(current_greenlet, "name", None)
    if greenlet_name is not None and not greenlet_name.startswith("Greenlet-"):
        event_dict["greenlet_name"] = greenlet_name
    return event_dict


def level_for_debug_level(debug_level: int) -> str:
    """Map the numeric debug level (as set via the `DEBUG` env var) to a logging level."""
    return "DEBUG" if debug_level > 0 else DEFAULT_LOG_LEVEL


def configure_logging(
    debug_level: int = 0, log_file: Optional[str] = None, colorize: bool = True
) -> None:
    """Route structlog and stdlib logging through a single console or file handler."""
    structlog.reset_defaults()

    processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_greenlet_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_file:
        handler: Dict[str, Any] = {
            "class": "logging.handlers.WatchedFileHandler",
            "filename": log_file,
            "formatter": "plain",
        }
    else:
        handler = {
            "class": "logging.StreamHandler",
            "formatter": "colorized" if colorize else "plain",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": structlog.dev.ConsoleRenderer(colors=False),
                    "foreign_pre_chain": processors,
                },
                "colorized": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": structlog.dev.ConsoleRenderer(colors=True),
                    "foreign_pre_chain": processors,
                },
            },
            "handlers": {"default": handler},
            "loggers": {
                "": {"handlers": ["default"], "level": DEFAULT_LOG_LEVEL, "propagate": True},
                "raiden_kit": {"level": level_for_debug_level(debug_level)},
            },
        }
    )
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
