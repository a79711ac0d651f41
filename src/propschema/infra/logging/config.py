from __future__ import annotations

"""
Logging Configuration Models.

The console follows the CLI verbosity; the optional log file records every
pass at its own threshold.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging setup of one propschema process.

    Attributes:
        level: Console severity threshold.
        console: Write records to stderr.
        log_file: Rotating log file path; None disables file logging.
        file_level: Severity threshold of the log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    file_level: str = "DEBUG"

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "[propschema] %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> "LoggingConfig":
        """Console at INFO (DEBUG with --debug), plus an optional file trail."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file or None)


def parse_level(level: Optional[str]) -> int:
    """Numeric level for a level name; unknown or empty names mean INFO."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)
