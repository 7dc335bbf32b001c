"""Debug logging for ``matchtree run``.

A run logs every check it evaluates to a debug file, and to stderr as
well with ``--verbose``. Each run gets its own named logger so that two
runs in one process never write into each other's files.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _run_handlers(debug_file: Path, verbose: bool) -> list[logging.Handler]:
    debug_file.parent.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [logging.FileHandler(debug_file, mode="a")]
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    return handlers


def setup_logger(
    debug_file: Path, verbose: bool = False, logger_name: str = "matchtree"
) -> logging.Logger:
    """Return a DEBUG logger for one check run.

    Raises RuntimeError if ``logger_name`` already has handlers attached;
    release it with ``teardown_logger`` first.
    """
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        raise RuntimeError(
            f"Logger '{logger_name}' already exists; use a unique logger_name per run"
        )

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _run_handlers(debug_file, verbose):
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.disabled = False
    logger.setLevel(logging.DEBUG)
    return logger


def teardown_logger(logger: logging.Logger) -> None:
    """Close and detach every handler added by ``setup_logger``."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
