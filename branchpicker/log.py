"""Logging setup for the CLI.

The selector owns the terminal while it runs, so log records never go to
stdout or stderr: they are written to a file when one is requested and
discarded otherwise.

INFO records the git commands run and each session outcome; DEBUG adds
absorbed query failures and fallbacks.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENV_VAR = "BRANCHPICKER_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: str | None = None, *, verbose: bool = False) -> logging.Logger:
    """Attach a handler to the package logger and return it.

    ``log_file`` falls back to the ``BRANCHPICKER_LOG`` environment variable.
    """
    logger = logging.getLogger("branchpicker")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    target = log_file or os.environ.get(LOG_ENV_VAR) or None
    if target:
        handler: logging.Handler = logging.FileHandler(Path(target).expanduser(), encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
