"""
Keyed Hashing
=============
HMAC digests over MD5, SHA-1 and SHA-256.

Digests are deterministic for identical (algorithm, key, value, encoding).
Compare digests with ``hmac_verify`` (constant time), never with ``==``.
"""

import hashlib
import hmac
from enum import Enum
from typing import Any, Optional, Union

import structlog

from .codec import decode_bytes, encode_bytes, serialize_value
from .config import get_config
from .exceptions import InvalidArgument
from .metrics import track_operation
from .validation import ensure_bytes, require

logger = structlog.get_logger(__name__)


class HmacAlgorithm(str, Enum):
    """Supported HMAC hash functions."""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"


_DIGESTS = {
    HmacAlgorithm.MD5: hashlib.md5,
    HmacAlgorithm.SHA1: hashlib.sha1,
    HmacAlgorithm.SHA256: hashlib.sha256,
}


def _resolve_algorithm(algorithm: Union[HmacAlgorithm, str]) -> HmacAlgorithm:
    try:
        return HmacAlgorithm(algorithm)
    except ValueError:
        raise InvalidArgument(
            "algorithm must be one of md5, sha1, sha256",
            argument="algorithm",
        ) from None


def hmac_digest(
    algorithm: Union[HmacAlgorithm, str],
    key: Union[str, bytes],
    value: Any,
    encoding: Optional[str] = None,
) -> str:
    """
    Compute an HMAC digest.

    Args:
        algorithm: md5, sha1 or sha256
        key: HMAC key
        value: Message; non-string values are JSON serialized
        encoding: Output encoding (hex, base64, latin1), defaults to hex

    Returns:
        Encoded digest string
    """
    algo = _resolve_algorithm(algorithm)
    key_bytes = ensure_bytes(key, "key")
    require(value, "value")
    encoding = encoding or get_config().hmac_encoding

    mac = hmac.new(key_bytes, serialize_value(value), _DIGESTS[algo])
    return encode_bytes(mac.digest(), encoding)


@track_operation("hmac_md5", "md5")
async def hmac_md5(key: Union[str, bytes], value: Any, encoding: Optional[str] = None) -> str:
    """Creates an MD5 HMAC digest."""
    return hmac_digest(HmacAlgorithm.MD5, key, value, encoding)


@track_operation("hmac_sha1", "sha1")
async def hmac_sha1(key: Union[str, bytes], value: Any, encoding: Optional[str] = None) -> str:
    """Creates a SHA-1 HMAC digest."""
    return hmac_digest(HmacAlgorithm.SHA1, key, value, encoding)


@track_operation("hmac_sha256", "sha256")
async def hmac_sha256(key: Union[str, bytes], value: Any, encoding: Optional[str] = None) -> str:
    """Creates a SHA-256 HMAC digest."""
    return hmac_digest(HmacAlgorithm.SHA256, key, value, encoding)


@track_operation("hmac_verify")
async def hmac_verify(
    algorithm: Union[HmacAlgorithm, str],
    key: Union[str, bytes],
    value: Any,
    expected: str,
    encoding: Optional[str] = None,
) -> bool:
    """
    Verify an HMAC digest using constant-time comparison.

    Args:
        algorithm: md5, sha1 or sha256
        key: HMAC key
        value: Message that was signed
        expected: Digest to check, in the given encoding
        encoding: Encoding of expected (defaults to hex)

    Returns:
        True if the digest matches
    """
    require(expected, "expected")
    if not isinstance(expected, str):
        raise InvalidArgument("expected must be a string", argument="expected")
    encoding = encoding or get_config().hmac_encoding

    computed = hmac_digest(algorithm, key, value, encoding)
    matched = hmac.compare_digest(
        decode_bytes(computed, encoding),
        decode_bytes(expected, encoding),
    )
    if not matched:
        logger.debug("hmac.mismatch", algorithm=_resolve_algorithm(algorithm).value)
    return matched
