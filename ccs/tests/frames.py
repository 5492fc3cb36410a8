"""Frame building helpers shared by the native host tests."""
from __future__ import annotations

import json
import struct


def frame(payload: dict[str, object] | bytes) -> bytes:
    """Build a native-order length-prefixed frame."""
    body = (
        payload
        if isinstance(payload, bytes)
        else json.dumps(payload).encode("utf-8")
    )
    return struct.pack("=I", len(body)) + body


def read_frames(data: bytes) -> list[dict[str, object]]:
    """Split a byte stream of frames into decoded JSON bodies."""
    messages: list[dict[str, object]] = []
    offset = 0
    while offset < len(data):
        length = struct.unpack("=I", data[offset : offset + 4])[0]
        body = data[offset + 4 : offset + 4 + length]
        messages.append(json.loads(body))
        offset += 4 + length
    return messages
