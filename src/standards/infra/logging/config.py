from __future__ import annotations

"""
Logging Configuration Models.

The CLI writes terse warnings to stderr by default, everything with
--debug, and optionally mirrors records into a rotating log file set by
'log_file' / STANDARDS_LOG_FILE.
"""

import logging
from dataclasses import dataclass
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one configure_logging() call.

    Attributes:
        level: Level name; unknown names fall back to WARNING.
        console: Write records to stderr.
        log_file: Rotating log file, created with its parent directories.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> "LoggingConfig":
        return cls(level="DEBUG" if debug else "WARNING", console=True, log_file=log_file)

    @property
    def level_number(self) -> int:
        value = logging.getLevelName(str(self.level or "").strip().upper())
        return value if isinstance(value, int) else logging.WARNING
