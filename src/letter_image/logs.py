from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOGGER_NAME = "letter_image"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logger(path: str = "", verbose: bool = False, stream: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Configure the package logger once.

    `stream` replaces the default stdout handler; the TUI passes Textual's
    handler so log lines never land on top of the screen.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(logging.DEBUG)
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT)
    if stream is None:
        stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(logging.DEBUG if verbose else logging.INFO)
    stream.setFormatter(fmt)
    log.addHandler(stream)
    if path:
        handler = RotatingFileHandler(path, maxBytes=5*1024*1024, backupCount=5)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(fmt)
        log.addHandler(handler)
    return log
