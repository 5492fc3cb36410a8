"""Chrome native messaging protocol framing.

Each frame is a 4-byte unsigned length in the host's native
byte order followed by that many bytes of UTF-8 JSON. No
byte order normalization is done: the browser writes lengths
in native order, so both ends must share the platform.
"""
from __future__ import annotations

import struct

from pydantic import TypeAdapter, ValidationError
from returns.result import Failure, Result, Success

from ccs.native_host.errors import HostError
from ccs.native_host.types import Request, Response

HEADER_SIZE = 4
_LENGTH_FORMAT = "=I"
_MAX_BODY_SIZE = 2**32 - 1

_request_adapter: TypeAdapter[Request] = TypeAdapter(Request)


def encode_frame(body: bytes) -> bytes:
    """Prefix body with its native byte order length.

    Raises ValueError if body does not fit a 32-bit length.
    """
    if len(body) > _MAX_BODY_SIZE:
        msg = f"Frame body too large: {len(body)} bytes"
        raise ValueError(msg)
    return struct.pack(_LENGTH_FORMAT, len(body)) + body


def decode_length(header: bytes) -> int:
    """Interpret a 4-byte header as the payload length."""
    length: int = struct.unpack(_LENGTH_FORMAT, header)[0]
    return length


def decode_request(body: bytes) -> Result[Request, HostError]:
    """Decode a frame payload into a typed request.

    Malformed JSON, an unknown or missing action, and missing
    or mistyped fields all produce a RequestDecodeError.
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        return Failure(
            HostError(
                operation="protocol.decode_request",
                error_type="RequestDecodeError",
                message=f"Payload is not valid UTF-8: {exc}",
                context={"size": len(body)},
            ),
        )
    try:
        request = _request_adapter.validate_json(text)
    except ValidationError as exc:
        return Failure(
            HostError(
                operation="protocol.decode_request",
                error_type="RequestDecodeError",
                message=(
                    f"Invalid request: {exc.error_count()}"
                    " validation error(s)"
                ),
                context={
                    "errors": [
                        err["msg"] for err in exc.errors()
                    ],
                    "size": len(body),
                },
            ),
        )
    return Success(request)


def encode_response(response: Response) -> bytes:
    """Encode a response as a complete frame.

    Absent optional fields are omitted, so the shape alone
    tells the caller which response it is.
    """
    body = response.model_dump_json(exclude_none=True).encode("utf-8")
    return encode_frame(body)
