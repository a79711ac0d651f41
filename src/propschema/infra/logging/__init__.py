from __future__ import annotations

from .config import LoggingConfig
from .core import (
    PACKAGE_LOGGER_NAME,
    configure_logging,
    get_logger,
    reset_logging,
)

__all__ = [
    "LoggingConfig",
    "PACKAGE_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "reset_logging",
]
