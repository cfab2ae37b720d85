"""
Logging setup.

Library modules only create loggers via logging.getLogger(__name__);
applications call setup_logging() once.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from porpoise.config.runtime import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure root logging to stderr and optionally a file."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )


def setup_logging_from_config(config: Optional[LoggingConfig] = None) -> None:
    """Configure logging from a LoggingConfig (defaults: INFO, stderr only)."""
    config = config or LoggingConfig()
    setup_logging(config.level, config.file)
