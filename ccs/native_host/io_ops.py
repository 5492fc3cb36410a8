"""I/O boundary for native messaging host.

All external I/O (stdin, stdout, filesystem, console) goes
through here. Functions return IOResult and never raise for
OS errors. Tests mock these functions at this boundary.
"""
from __future__ import annotations

import os
import stat
import sys
from typing import IO

import click
from returns.io import IOFailure, IOResult, IOSuccess

from ccs.native_host.errors import HostError
from ccs.native_host.protocol import HEADER_SIZE, decode_length

READ_CHUNK_SIZE = 65536


def _get_stdin_buffer() -> IO[bytes]:
    """Return stdin binary buffer. Mockable seam."""
    return sys.stdin.buffer


def _get_stdout_buffer() -> IO[bytes]:
    """Return stdout binary buffer. Mockable seam."""
    return sys.stdout.buffer


def _read_exact(stream: IO[bytes], size: int) -> bytes:
    """Read up to size bytes, stopping early only at EOF."""
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(min(remaining, READ_CHUNK_SIZE))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_frame() -> IOResult[bytes | None, HostError]:
    """Read one length-prefixed frame payload from stdin.

    Returns IOSuccess(None) when stdin ends before a full
    4-byte header (the browser closed the pipe). A payload
    cut short after the header is an IOFailure.
    """
    stdin_buf = _get_stdin_buffer()
    try:
        header = _read_exact(stdin_buf, HEADER_SIZE)
        if len(header) < HEADER_SIZE:
            return IOSuccess(None)
        length = decode_length(header)
        body = _read_exact(stdin_buf, length)
    except OSError as exc:
        return IOFailure(
            HostError(
                operation="io_ops.read_frame",
                error_type="FrameReadError",
                message=f"Failed to read from stdin: {exc}",
            ),
        )
    if len(body) < length:
        return IOFailure(
            HostError(
                operation="io_ops.read_frame",
                error_type="TruncatedFrameError",
                message=(
                    f"Expected {length} payload bytes,"
                    f" got {len(body)}"
                ),
                context={"expected": length, "received": len(body)},
            ),
        )
    return IOSuccess(body)


def write_frame(frame: bytes) -> IOResult[None, HostError]:
    """Write a complete frame to stdout and flush it."""
    stdout_buf = _get_stdout_buffer()
    try:
        stdout_buf.write(frame)
        stdout_buf.flush()
    except OSError as exc:
        return IOFailure(
            HostError(
                operation="io_ops.write_frame",
                error_type="FrameWriteError",
                message=f"Failed to write to stdout: {exc}",
                context={"size": len(frame)},
            ),
        )
    return IOSuccess(None)


def path_exists(path: str) -> bool:
    """Check if a filesystem path exists. Mockable seam."""
    return os.path.exists(path)  # noqa: PTH110


def makedirs(path: str) -> IOResult[None, HostError]:
    """Create directory and parents. Mockable seam."""
    try:
        os.makedirs(path, exist_ok=True)  # noqa: PTH103
    except (OSError, ValueError) as exc:
        return IOFailure(
            HostError(
                operation="io_ops.makedirs",
                error_type=type(exc).__name__,
                message=str(exc),
                context={"path": path},
            ),
        )
    return IOSuccess(None)


def write_file(path: str, content: str) -> IOResult[None, HostError]:
    """Replace a file's contents with UTF-8 text. Mockable seam.

    Bytes are written verbatim, without newline translation.
    """
    try:
        data = content.encode("utf-8")
        with open(path, "wb") as f:  # noqa: PTH123
            f.write(data)
    except (OSError, ValueError) as exc:
        return IOFailure(
            HostError(
                operation="io_ops.write_file",
                error_type=type(exc).__name__,
                message=str(exc),
                context={"path": path},
            ),
        )
    return IOSuccess(None)


def chmod_executable(path: str) -> IOResult[None, HostError]:
    """Make a file executable. Mockable seam."""
    try:
        st = os.stat(path)  # noqa: PTH116
        os.chmod(path, st.st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)  # noqa: PTH101
    except OSError as exc:
        return IOFailure(
            HostError(
                operation="io_ops.chmod_executable",
                error_type=type(exc).__name__,
                message=str(exc),
                context={"path": path},
            ),
        )
    return IOSuccess(None)


def print_output(message: str) -> None:
    """Print a message to the console. Mockable seam."""
    click.echo(message)
