from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the `propschema` logger. Extraction
runs on a single thread, so handlers are attached to the package logger
directly.
"""

import logging
from typing import List

from propschema.infra.logging.config import LoggingConfig, parse_level
from propschema.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
)

# Root of the package logger hierarchy configured by this module
PACKAGE_LOGGER_NAME: str = "propschema"

_CONFIGURED_FLAG_ATTR: str = "_propschema_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach propschema's handlers to the package logger once.

    The logger level is the lowest threshold among the enabled handlers, so
    a DEBUG log file still receives records while the console stays at INFO.

    Args:
        cfg: Handler setup to apply.
        force: Replace handlers installed by an earlier call.

    Returns:
        logging.Logger: The `propschema` logger.
    """
    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    _remove_our_handlers(root)

    console_level = parse_level(cfg.level)
    handlers: List[logging.Handler] = []
    levels: List[int] = [console_level]

    if cfg.console:
        handlers.append(_create_console_handler(console_level, cfg.console_fmt))

    if cfg.log_file:
        file_level = parse_level(cfg.file_level)
        fh = _create_rotating_file_handler(
            cfg.log_file,
            file_level,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh is not None:
            handlers.append(fh)
            levels.append(file_level)

    root.setLevel(min(levels))
    for handler in handlers:
        root.addHandler(handler)

    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def reset_logging() -> None:
    """Detach our handlers and clear the configured flag."""
    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    _remove_our_handlers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()
