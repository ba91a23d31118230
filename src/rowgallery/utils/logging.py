"""Package-wide logging setup."""

from __future__ import annotations

import logging
import os

from ..config import LOG_LEVEL_ENV

_ROOT_LOGGER_NAME = "rowgallery"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str = _ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a logger below the ``rowgallery`` namespace.

    The package logger receives a single stream handler the first time this
    helper runs.  Child loggers propagate to it, so modules may equally use
    ``logging.getLogger(__name__)``.
    """

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))
    if name == _ROOT_LOGGER_NAME or name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
