"""Main entry point for native messaging host.

Runs one long-lived read -> dispatch -> write loop over
stdin/stdout until the browser closes the pipe or any
framing or output step fails. Command-line arguments passed
by the browser (caller origin, window handle) are ignored.
"""
from __future__ import annotations

import logging

from returns.io import IOFailure
from returns.result import Failure
from returns.unsafe import unsafe_perform_io

from ccs.native_host import io_ops
from ccs.native_host.config import LOGGER_NAME
from ccs.native_host.handler import dispatch
from ccs.native_host.log import setup_debug_logging
from ccs.native_host.protocol import decode_request, encode_response

logger = logging.getLogger(LOGGER_NAME)


def serve_once() -> bool:
    """Handle one request frame.

    Returns True when the loop should continue. Returns False
    on clean end of input and on any framing or output
    failure; no response is written for a bad frame.
    """
    read_result = io_ops.read_frame()
    if isinstance(read_result, IOFailure):
        error = unsafe_perform_io(read_result.failure())
        logger.error("Frame read failed: %s", error)
        return False

    body = unsafe_perform_io(read_result.unwrap())
    if body is None:
        logger.debug("stdin closed, exiting")
        return False

    decode_result = decode_request(body)
    if isinstance(decode_result, Failure):
        logger.error("Undecodable request: %s", decode_result.failure())
        return False

    response = dispatch(decode_result.unwrap())

    write_result = io_ops.write_frame(encode_response(response))
    if isinstance(write_result, IOFailure):
        error = unsafe_perform_io(write_result.failure())
        logger.error("Frame write failed: %s", error)
        return False
    return True


def main() -> None:
    """Run the native messaging host until input ends."""
    setup_debug_logging()
    logger.debug("--- ccs-host started ---")
    while serve_once():
        pass
    logger.debug("--- ccs-host finished ---")


if __name__ == "__main__":
    main()
