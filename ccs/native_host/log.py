"""File-based debug logging for the native messaging host.

stdout carries protocol frames, so log records only ever go
to a file.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ccs.native_host.config import LOG_FILE, LOGGER_NAME, MAX_LOG_LINES

if TYPE_CHECKING:
    from pathlib import Path


def _truncate_log(log_file: Path, max_lines: int) -> None:
    """Keep only the last max_lines lines of the log file."""
    lines = log_file.read_text(errors="replace").splitlines()
    if len(lines) > max_lines:
        log_file.write_text("\n".join(lines[-max_lines:]) + "\n")


def setup_debug_logging(
    log_file: Path = LOG_FILE,
    max_lines: int = MAX_LOG_LINES,
) -> logging.Logger:
    """Set up file-based debug logging with line truncation."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Only our own handlers mean already configured
    if any(
        isinstance(h, (logging.FileHandler, logging.NullHandler))
        for h in logger.handlers
    ):
        return logger

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if log_file.exists():
            _truncate_log(log_file, max_lines)

        handler = logging.FileHandler(str(log_file))
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    except OSError:
        # Unwritable log location: run without a file handler
        logger.addHandler(logging.NullHandler())

    return logger
