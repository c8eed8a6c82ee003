from __future__ import annotations

import json
from typing import Any

from jwt.utils import base64url_decode, base64url_encode


def encode_segment(obj: Any) -> str:
    """JSON-encode `obj` compactly and return it as an unpadded base64url segment."""
    raw = json.dumps(obj, separators=(",", ":")).encode("utf-8")
    return base64url_encode(raw).decode("ascii")


def decode_segment(segment: str) -> Any:
    """
    Raises:
        ValueError for bad base64url, bad UTF-8 or bad JSON.
    """
    return json.loads(decode_bytes(segment))


def encode_bytes(raw: bytes) -> str:
    return base64url_encode(raw).decode("ascii")


def decode_bytes(segment: str) -> bytes:
    """
    Raises:
        ValueError (binascii.Error, UnicodeEncodeError) for undecodable input.
    """
    return base64url_decode(segment)
