"""Native messaging request handlers.

Routes each typed request to its handler. Handlers return
fully formed responses; operation failures become data in
the response, never exceptions.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import assert_never

from returns.io import IOFailure
from returns.unsafe import unsafe_perform_io

from ccs.native_host import io_ops
from ccs.native_host.config import LOGGER_NAME
from ccs.native_host.types import (
    PingRequest,
    Pong,
    Request,
    Response,
    SaveRequest,
    SaveResult,
)

logger = logging.getLogger(LOGGER_NAME)


def dispatch(request: Request) -> Response:
    """Route a request to its handler."""
    match request:
        case SaveRequest(path=path, content=content):
            logger.debug("save: %s (%d chars)", path, len(content))
            return handle_save(path, content)
        case PingRequest():
            logger.debug("Ping received")
            return handle_ping()
        case _:
            assert_never(request)


def handle_save(path: str, content: str) -> SaveResult:
    """Write content to an absolute path.

    Missing parent directories are created first. Nothing is
    rolled back: a failed write can leave new directories
    behind.
    """
    target = Path(path)
    if not target.is_absolute():
        return SaveResult.failed("Path must be absolute")

    parent = str(target.parent)
    if not io_ops.path_exists(parent):
        mkdir_result = io_ops.makedirs(parent)
        if isinstance(mkdir_result, IOFailure):
            error = unsafe_perform_io(mkdir_result.failure())
            logger.warning("save failed: %s", error)
            return SaveResult.failed(
                f"Failed to create directories: {error.message}",
            )

    write_result = io_ops.write_file(path, content)
    if isinstance(write_result, IOFailure):
        error = unsafe_perform_io(write_result.failure())
        logger.warning("save failed: %s", error)
        return SaveResult.failed(
            f"Failed to write file: {error.message}",
        )

    return SaveResult.ok(str(target))


def handle_ping() -> Pong:
    """Reply to a liveness check."""
    return Pong()
