"""File logging for habitpro.

Everything goes to ``habitpro.log`` under the platform log directory; the
terminal only ever shows Rich output. Set ``HABITPRO_LOG_LEVEL`` (e.g.
``INFO``) to quieten the file.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "habitpro_cli"
LOG_LEVEL_ENV = "HABITPRO_LOG_LEVEL"

_ROTATE_AT = 5 * 1024 * 1024
_KEEP_FILES = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_configured = False


def log_file_path() -> Path:
    return Path(user_log_dir(LOGGER_NAME)) / "habitpro.log"


def _file_handler() -> RotatingFileHandler:
    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=_ROTATE_AT, backupCount=_KEEP_FILES, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def _level_from_env() -> int:
    """Level named by HABITPRO_LOG_LEVEL; unknown names fall back to DEBUG."""
    name = os.environ.get(LOG_LEVEL_ENV, "DEBUG").strip().upper()
    return logging.getLevelNamesMapping().get(name, logging.DEBUG)


def get_logger() -> logging.Logger:
    """The application logger; the file handler is attached on first use."""
    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    if _configured:
        return logger

    logger.setLevel(_level_from_env())
    if not logger.handlers:
        logger.addHandler(_file_handler())
    logger.propagate = False
    _configured = True
    return logger
