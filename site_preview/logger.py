# === FILE: site_preview/logger.py ===
"""Logging setup for **site_preview**.

Library modules only ever call ``logging.getLogger(LOGGER_NAME)``; nothing is
attached at import time, so an embedding application keeps control of its
own handlers. The CLI calls :func:`init_logging` once per invocation.

Log records go to stderr because ``site-preview preview`` writes its JSON
report to stdout.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "SitePreview"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_LevelT = Union[int, str]


def _file_handler(file: Path | str) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )


def init_logging(
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``SitePreview`` logger and apply *level*.

    A rotating *log_file* handler (5 MiB, 3 backups) is added next to the
    stderr one when a path is given.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(_file_handler(log_file))
    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


__all__ = ["LOGGER_NAME", "DEFAULT_FORMAT", "init_logging"]
