"""
Sync Password Operations
========================
Blocking equivalents of the async API for non-async contexts.
"""

from typing import Union

from ..exceptions import MalformedHash
from ..validation import require
from .hasher import get_strategy
from .models import Algorithm
from .utils import identify_hash


def hash_password_sync(
    value: Union[str, bytes],
    algorithm: Union[Algorithm, str] = Algorithm.ARGON2,
    **params,
) -> str:
    """Synchronous version of hash_password (use async version when possible)."""
    return get_strategy(algorithm).hash(value, **params)


def verify_password_sync(
    given: Union[str, bytes],
    encoded_hash: str,
    algorithm: Union[Algorithm, str, None] = None,
    **params,
) -> bool:
    """Synchronous version of verify_password (use async version when possible)."""
    require(given, "given")
    require(encoded_hash, "hash")

    if algorithm is None:
        algorithm = identify_hash(encoded_hash)
        if algorithm is None:
            raise MalformedHash("hash format not recognized")

    return get_strategy(algorithm).verify(given, encoded_hash, **params)
