"""Logging setup for scripts and notebooks using pyelisa.

Library modules only create loggers (``logging.getLogger(__name__)``); call
:func:`configure_logging` once to see their output.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

PACKAGE_LOGGER = "pyelisa"

_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


def configure_logging(
    verbose: int = 1, quiet: bool = False, log_file: str | None = None
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Parameters
    ----------
    verbose : int
        Verbosity level (0=ERROR, 1=WARNING, 2=INFO, 3=DEBUG).  Default 1.
    quiet : bool
        Show only ERROR messages on the console.
    log_file : str or None
        Also write everything at DEBUG level to this rotating log file.

    Returns
    -------
    logging.Logger
        The ``pyelisa`` logger.  Calling again does not add duplicate
        handlers; it only updates the console level.
    """
    level = logging.ERROR if quiet else _LEVELS[min(max(verbose, 0), 3)]
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)

    console = next(
        (
            h for h in logger.handlers
            if type(h) is logging.StreamHandler
        ),
        None,
    )
    if console is None:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(fmt="[%(levelname)-8s]  %(message)s"))
        logger.addHandler(console)
    console.setLevel(level)

    if log_file and not any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == os.path.abspath(log_file)
        for h in logger.handlers
    ):
        file_handler = RotatingFileHandler(log_file, maxBytes=10**6, backupCount=3)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)-8s] %(name)-20s : %(message)s",
                datefmt="%Y-%m-%d %H:%M",
            )
        )
        logger.addHandler(file_handler)

    return logger
