"""Logging setup for the HTB client.

Library modules only call get_logger(); scripts and applications call
setup_logger() once to attach handlers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from htb_client.utils.config import htb_log_level

LOGGER_NAME = "htb_client"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = htb_log_level()
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str = LOGGER_NAME,
    level: int | str | None = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return a logger.

    Args:
        name: Logger name.
        level: Logging level (int or name such as "DEBUG"). If None, HTB_LOG_LEVEL is used.
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger. Calling again for a configured logger is a no-op.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(_resolve_level(level))
    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the client logger."""
    return logging.getLogger(name)
