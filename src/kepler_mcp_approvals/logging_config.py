"""Logging configuration for Kepler MCP Approvals.

All package loggers hang off a single package logger that writes to
stderr, so stdout stays free for the MCP stdio transport.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from kepler_mcp_approvals.config import Config

# Package logger name
LOGGER_NAME = "kepler_mcp_approvals"

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_handler: logging.Handler | None = None


def setup_logging(config: Config, stream: TextIO | None = None) -> None:
    """Configure the package logger from configuration.

    Idempotent: the first call installs the handler, later calls only
    update the level.

    Args:
        config: Application configuration containing log_level setting
        stream: Stream to log to (defaults to stderr)
    """
    global _handler

    log_level = getattr(logging, config.log_level.value)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # HTTP client request lines are only interesting when debugging
    third_party_level = logging.DEBUG if log_level == logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    if _handler is not None:
        _handler.setLevel(log_level)
        return

    logger.handlers.clear()

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setLevel(log_level)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(_handler)
    logger.propagate = False

    logger.debug("Logging configured with level %s", config.log_level.value)


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Logger instance
    """
    if name.startswith(LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Remove the package handler so setup_logging can run again (for tests)."""
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    _handler = None
