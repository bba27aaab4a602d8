from __future__ import annotations

"""
Logging Handler Factories.

Every handler built here is tagged, so shutdown_logging() removes exactly
what the CLI installed and leaves pytest's capture handlers alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from standards.infra.logging.config import CONSOLE_FORMAT, DATE_FORMAT, FILE_FORMAT, LoggingConfig

_HANDLER_TAG_ATTR: str = "_standards_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_output_handlers(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the sinks the queue listener writes to.

    Returns:
        List[logging.Handler]: stderr and/or file handlers, possibly empty.
    """
    level = cfg.level_number
    handlers: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(console)

    if cfg.log_file:
        file_handler = _open_log_file(cfg.log_file, cfg.max_bytes, cfg.backup_count)
        if file_handler:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        _tag_handler(handler)
    return handlers


def _open_log_file(log_file: str, max_bytes: int, backup_count: int) -> Optional[RotatingFileHandler]:
    """Open the rotating log file; on failure warn on stderr and keep going without it."""
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        return RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count,
                                   encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot write log file '{log_file}': {e}\n")
        return None
