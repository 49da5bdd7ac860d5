"""
Crypt Keeper Logging
====================
Structured logging setup for applications embedding crypt_keeper.

Every module logs through ``structlog.get_logger(__name__)``. Library code
never logs secret values, salts, keys or hashes; only operation names,
algorithms and cost parameters.

Usage:
    from crypt_keeper.logging import setup_logging

    setup_logging(level="DEBUG", json_output=False)
"""

import logging
import sys
from typing import List

import structlog


def _shared_processors() -> List:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
) -> structlog.stdlib.BoundLogger:
    """
    Configure structlog on top of the standard logging module.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON (production) instead of console output

    Returns:
        Logger bound to the crypt_keeper namespace
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger("crypt_keeper")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)

    logger = structlog.get_logger("crypt_keeper")
    logger.debug("logging.configured", level=level, json_output=json_output)
    return logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger with the given name."""
    return structlog.get_logger(name)
