"""
Codec
=====
Deterministic base64 transcoding plus the digest encodings shared by the
HMAC and PBKDF2 operations.
"""

import base64
import binascii
import json
from typing import Any

import structlog

from .exceptions import InvalidArgument
from .metrics import track_operation
from .validation import require

logger = structlog.get_logger(__name__)

# Output encodings for raw digests; latin1 maps each byte to one character
DIGEST_ENCODINGS = ("hex", "base64", "latin1")


def serialize_value(value: Any, name: str = "value") -> bytes:
    """
    Render a value as bytes.

    Bytes-like values pass through, strings are UTF-8 encoded, anything else
    goes through ``json.dumps`` (key order is insertion order, not sorted).
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    try:
        return json.dumps(value).encode("utf-8")
    except (TypeError, ValueError):
        raise InvalidArgument(
            f"{name} is not JSON serializable",
            argument=name,
        ) from None


def encode_bytes(raw: bytes, encoding: str) -> str:
    """Encode raw digest bytes as hex, base64 or latin1 text."""
    if encoding == "hex":
        return raw.hex()
    if encoding == "base64":
        return base64.b64encode(raw).decode("ascii")
    if encoding in ("latin1", "binary"):
        return raw.decode("latin-1")
    raise InvalidArgument(
        f"encoding must be one of {', '.join(DIGEST_ENCODINGS)}",
        argument="encoding",
    )


def decode_bytes(text: str, encoding: str) -> bytes:
    """Inverse of encode_bytes."""
    try:
        if encoding == "hex":
            return bytes.fromhex(text)
        if encoding == "base64":
            return base64.b64decode(text, validate=True)
        if encoding in ("latin1", "binary"):
            return text.encode("latin-1")
    except (ValueError, binascii.Error, UnicodeEncodeError):
        raise InvalidArgument(
            f"value is not valid {encoding} text",
            argument="expected",
        ) from None
    raise InvalidArgument(
        f"encoding must be one of {', '.join(DIGEST_ENCODINGS)}",
        argument="encoding",
    )


@track_operation("base64_encode")
async def base64_encode(value: Any) -> str:
    """
    Base64 encode the given value.

    Args:
        value: bytes, str, or any JSON-serializable value

    Returns:
        Standard base64 string
    """
    require(value, "value")
    return base64.b64encode(serialize_value(value)).decode("ascii")


@track_operation("base64_decode")
async def base64_decode(value: str) -> str:
    """
    Base64 decode the given string and return it as text.

    Bytes that are not valid UTF-8 are replaced, so binary payloads do not
    round-trip through this function.

    Args:
        value: Base64 string

    Returns:
        Decoded text
    """
    require(value, "value")
    if not isinstance(value, str):
        raise InvalidArgument("value must be a string", argument="value")

    try:
        raw = base64.b64decode(value)
    except binascii.Error:
        logger.warning("base64.decode_failed")
        raise InvalidArgument("value is not valid base64", argument="value") from None

    return raw.decode("utf-8", errors="replace")
