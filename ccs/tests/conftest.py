"""Shared test fixtures for the native host test suite."""
from __future__ import annotations

import logging
from io import BytesIO
from typing import TYPE_CHECKING

import pytest

from ccs.native_host.config import LOGGER_NAME

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def _isolate_host_logger() -> Iterator[None]:
    """Keep tests from attaching handlers to the real log file."""
    logger = logging.getLogger(LOGGER_NAME)
    saved = list(logger.handlers)
    logger.handlers.clear()
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved


@pytest.fixture
def stdio(mocker: MockerFixture) -> tuple[BytesIO, BytesIO]:
    """Patch the stdin/stdout seams with in-memory buffers.

    Callers write request frames into stdin with
    stdin.write(...) followed by stdin.seek(0).
    """
    stdin = BytesIO()
    stdout = BytesIO()
    mocker.patch(
        "ccs.native_host.io_ops._get_stdin_buffer",
        return_value=stdin,
    )
    mocker.patch(
        "ccs.native_host.io_ops._get_stdout_buffer",
        return_value=stdout,
    )
    return stdin, stdout
