"""Service logging configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from service_commons.logging import get_named_logger
from service_commons.logging import setup_logging as setup_service_logging

if TYPE_CHECKING:
    import logging

SERVICE_LOGGER_NAME = "vaping_duty_finance_service"


def setup_logging(level: str, log_directory: str | None = None) -> logging.Logger:
    """Configure JSON logging for every logger under the service package."""
    return setup_service_logging(level, SERVICE_LOGGER_NAME, log_directory)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module of this service."""
    return get_named_logger(SERVICE_LOGGER_NAME, name)
