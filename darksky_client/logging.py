"""structlog loggers for the client, routed through stdlib ``logging``.

Importing the package configures nothing global: events go to the
``darksky_client`` stdlib logger, which only carries a ``NullHandler``.
Applications either attach their own handlers to that logger or call
:func:`setup_logging` to have events rendered to a stream.
"""

from __future__ import annotations

import logging as py_logging
from typing import IO, Optional

import structlog

from darksky_client.config import LoggingConfig, app_config

PACKAGE_LOGGER = "darksky_client"

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

_handler: Optional[py_logging.Handler] = None

py_logging.getLogger(PACKAGE_LOGGER).addHandler(py_logging.NullHandler())


def setup_logging(
    config: Optional[LoggingConfig] = None, *, stream: Optional[IO[str]] = None
) -> py_logging.Handler:
    """Render the client's events to ``stream`` (stderr by default).

    Only the ``darksky_client`` logger is touched; calling this again
    replaces the handler installed by the previous call.
    """
    global _handler

    config = config or app_config.logging
    level = getattr(py_logging, str(config.level).upper(), py_logging.WARNING)
    renderer = structlog.processors.JSONRenderer() if config.json else structlog.dev.ConsoleRenderer(colors=False)

    handler = py_logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    package_logger = py_logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    _handler = handler
    return handler


def get_logger(name: str = PACKAGE_LOGGER):
    return structlog.wrap_logger(
        py_logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
