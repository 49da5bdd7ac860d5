"""
Argument Validation
===================
Required-argument checks shared by every public operation.
"""

from typing import Any, Union

from .exceptions import InvalidArgument


def is_missing(value: Any) -> bool:
    """None and empty str/bytes count as missing."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, bytearray)) and len(value) == 0:
        return True
    return False


def require(value: Any, name: str) -> Any:
    """Return value or raise InvalidArgument if it is missing."""
    if is_missing(value):
        raise InvalidArgument(f"{name} can not be null", argument=name)
    return value


def require_positive_int(value: Any, name: str) -> int:
    """Return value if it is an int >= 1 (bools rejected)."""
    if value is None:
        raise InvalidArgument(f"{name} can not be null", argument=name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer", argument=name)
    if value < 1:
        raise InvalidArgument(f"{name} must be a positive integer", argument=name)
    return value


def ensure_bytes(value: Union[str, bytes, bytearray, memoryview], name: str) -> bytes:
    """
    Coerce a secret-like value to bytes.

    Strings are UTF-8 encoded. Anything other than str or a bytes-like
    object is rejected.
    """
    require(value, name)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise InvalidArgument(f"{name} must be a string or bytes", argument=name)
