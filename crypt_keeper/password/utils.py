"""
Password Utilities
==================
Hash format detection and upgrade checks.
"""

from typing import Optional, Union

from ..exceptions import InvalidArgument
from .hasher import ARGON2_PREFIX, BCRYPT_PREFIXES, get_strategy
from .models import Algorithm


def identify_hash(encoded_hash: str) -> Optional[Algorithm]:
    """
    Detect the algorithm of a self-describing hash from its prefix.

    Returns:
        Algorithm.BCRYPT, Algorithm.ARGON2, or None if unrecognized
    """
    if not isinstance(encoded_hash, str):
        return None
    if encoded_hash.startswith(BCRYPT_PREFIXES):
        return Algorithm.BCRYPT
    if encoded_hash.startswith(ARGON2_PREFIX):
        return Algorithm.ARGON2
    return None


def needs_rehash(
    encoded_hash: str,
    algorithm: Union[Algorithm, str] = Algorithm.ARGON2,
    **params,
) -> bool:
    """
    Check if a hash needs to be upgraded.

    Returns True if:
    - Hash was produced by another algorithm
    - Hash uses weaker parameters than requested (bcrypt ``rounds``,
      Argon2 ``options``)
    - Hash format is unknown

    Args:
        encoded_hash: The hash to check
        algorithm: Target algorithm (bcrypt or Argon2)
        **params: Target parameters

    Returns:
        True if the hash should be re-computed
    """
    algorithm = Algorithm.coerce(algorithm)
    if algorithm is Algorithm.PBKDF2:
        raise InvalidArgument(
            "needs_rehash requires a self-describing algorithm",
            argument="algorithm",
        )
    if not encoded_hash:
        return True

    return get_strategy(algorithm).needs_rehash(encoded_hash, **params)
