"""
Random Source
=============
CSPRNG-backed bytes, strings, numbers and UUIDs.

All values come from the ``secrets`` module (OS entropy). There is no
seeding interface; results are never reproducible.
"""

import base64
import secrets
import uuid
from typing import Optional, Union

from .exceptions import InvalidArgument
from .metrics import track_operation

# Divisor mapping 8 random bytes onto [0, 1]
_MAX_UINT64 = 0xFFFFFFFFFFFFFFFF


def random_bytes(num_bytes: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        num_bytes: Number of bytes (>= 1)

    Returns:
        Random bytes
    """
    if num_bytes is None:
        raise InvalidArgument("number of bytes can not be null", argument="num_bytes")
    if isinstance(num_bytes, bool) or not isinstance(num_bytes, int):
        raise InvalidArgument("number of bytes must be an integer", argument="num_bytes")
    if num_bytes < 1:
        raise InvalidArgument("number of bytes must be positive", argument="num_bytes")
    return secrets.token_bytes(num_bytes)


@track_operation("random_hex")
async def random_hex(num_bytes: int) -> str:
    """Random hex string of 2 * num_bytes characters."""
    return random_bytes(num_bytes).hex()


@track_operation("random_base64")
async def random_base64(num_bytes: int) -> str:
    """Random base64 string decoding to exactly num_bytes bytes."""
    return base64.b64encode(random_bytes(num_bytes)).decode("ascii")


@track_operation("generate_v4_uuid")
async def generate_v4_uuid() -> str:
    """
    Generate an RFC 4122 version 4 UUID.

    Version nibble is 4 and the variant nibble is one of 8, 9, a, b.
    """
    return str(uuid.uuid4())


def _check_bound(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer", argument=name)
    return value


def _random_unit() -> float:
    return int.from_bytes(secrets.token_bytes(8), "big") / _MAX_UINT64


def _random_between(low: int, high: int) -> int:
    if low > high:
        low, high = high, low
    return low + secrets.randbelow(high - low + 1)


@track_operation("random_number")
async def random_number(
    a: Optional[int] = None,
    b: Optional[int] = None,
) -> Union[float, int]:
    """
    Generate a random number.

    - No arguments: float in [0, 1]
    - One argument: integer in [0, a]
    - Two arguments: integer in [min(a, b), max(a, b)]

    Both ends of integer ranges are inclusive.
    """
    if a is None and b is None:
        return _random_unit()

    if b is None:
        return _random_between(0, _check_bound(a, "a"))
    if a is None:
        return _random_between(0, _check_bound(b, "b"))

    return _random_between(_check_bound(a, "a"), _check_bound(b, "b"))
