"""
Async Password Hashing
======================
Coroutine API over the password strategies.

PBKDF2 runs inline; bcrypt and Argon2 run in the worker pool. Every error,
argument validation included, is raised when the coroutine is awaited.
"""

from typing import Optional, Tuple, Union

import structlog

from ..exceptions import MalformedHash
from ..metrics import track_operation
from ..runner import run_blocking
from ..validation import require
from .hasher import OptionsLike, get_strategy
from .models import Algorithm
from .utils import identify_hash, needs_rehash

logger = structlog.get_logger(__name__)


@track_operation("pbkdf2_hash", "pbkdf2")
async def pbkdf2_hash(
    value: Union[str, bytes],
    salt: Union[str, bytes],
    rounds: int,
    key_length: Optional[int] = None,
    digest: Optional[str] = None,
    encoding: Optional[str] = None,
) -> str:
    """
    Hash a value with PBKDF2.

    Args:
        value: Value to hash
        salt: Salt, unique per value (the caller stores it)
        rounds: Work factor exponent; iterations = 2 ** rounds
        key_length: Derived key length in bytes (default 56)
        digest: HMAC digest name (default sha512)
        encoding: Output encoding (default base64)

    Returns:
        Encoded derived key
    """
    return get_strategy(Algorithm.PBKDF2).hash(
        value, salt, rounds, key_length, digest, encoding,
    )


@track_operation("pbkdf2_verify", "pbkdf2")
async def pbkdf2_verify(
    value: Union[str, bytes],
    expected: str,
    salt: Union[str, bytes],
    rounds: int,
    key_length: Optional[int] = None,
    digest: Optional[str] = None,
    encoding: Optional[str] = None,
) -> bool:
    """
    Recompute a PBKDF2 digest and compare it in constant time.

    All parameters must match the ones used by ``pbkdf2_hash``.
    """
    return get_strategy(Algorithm.PBKDF2).verify(
        value, expected, salt, rounds, key_length, digest, encoding,
    )


@track_operation("bcrypt_hash", "bcrypt")
async def bcrypt_hash(value: Union[str, bytes], rounds: int) -> str:
    """
    Hash a value with bcrypt.

    Args:
        value: Value to hash
        rounds: Cost factor passed to bcrypt (work doubles per increment)

    Returns:
        Self-describing bcrypt hash ($2b$<rounds>$...)
    """
    return await run_blocking(get_strategy(Algorithm.BCRYPT).hash, value, rounds)


@track_operation("bcrypt_compare", "bcrypt")
async def bcrypt_compare(given: Union[str, bytes], encoded_hash: str) -> bool:
    """
    Compare a value to a bcrypt hash.

    Malformed or foreign hashes return False rather than raising.
    """
    return await run_blocking(get_strategy(Algorithm.BCRYPT).verify, given, encoded_hash)


@track_operation("argon_hash", "argon2")
async def argon_hash(value: Union[str, bytes], options: OptionsLike = None) -> str:
    """
    Hash a value with Argon2.

    Args:
        value: Value to hash
        options: Argon2Options or mapping (variant/type, time_cost,
            memory_cost as log2 KiB, parallelism, hash_len, salt_len);
            unset fields use the configured defaults

    Returns:
        Self-describing Argon2 hash ($argon2id$v=19$...)
    """
    return await run_blocking(get_strategy(Algorithm.ARGON2).hash, value, options)


@track_operation("argon_compare", "argon2")
async def argon_compare(given: Union[str, bytes], encoded_hash: str) -> bool:
    """
    Compare a value to an Argon2 hash.

    Returns False on mismatch; raises MalformedHash if encoded_hash is not
    a parsable Argon2 hash.
    """
    return await run_blocking(get_strategy(Algorithm.ARGON2).verify, given, encoded_hash)


_DISPATCH_HASH = {
    Algorithm.PBKDF2: pbkdf2_hash,
    Algorithm.BCRYPT: bcrypt_hash,
    Algorithm.ARGON2: argon_hash,
}

_DISPATCH_VERIFY = {
    Algorithm.PBKDF2: pbkdf2_verify,
    Algorithm.BCRYPT: bcrypt_compare,
    Algorithm.ARGON2: argon_compare,
}


@track_operation("hash_password", "dispatch")
async def hash_password(
    value: Union[str, bytes],
    algorithm: Union[Algorithm, str] = Algorithm.ARGON2,
    **params,
) -> str:
    """
    Hash a password with the strategy selected by ``algorithm``.

    Params are forwarded: ``rounds`` for bcrypt, ``options`` for Argon2,
    ``salt``/``rounds``/... for PBKDF2.
    """
    algorithm = Algorithm.coerce(algorithm)
    return await _DISPATCH_HASH[algorithm](value, **params)


@track_operation("verify_password", "dispatch")
async def verify_password(
    given: Union[str, bytes],
    encoded_hash: str,
    algorithm: Union[Algorithm, str, None] = None,
    **params,
) -> bool:
    """
    Verify a password against a hash.

    Without ``algorithm`` the strategy is detected from the hash prefix
    (bcrypt or Argon2). PBKDF2 digests are not self-describing and need
    ``algorithm="pbkdf2"`` plus their parameters.

    Raises:
        MalformedHash: If the hash format cannot be identified
    """
    require(given, "given")
    require(encoded_hash, "hash")

    if algorithm is None:
        algorithm = identify_hash(encoded_hash)
        if algorithm is None:
            logger.warning("password.unknown_hash_format")
            raise MalformedHash("hash format not recognized")
    else:
        algorithm = Algorithm.coerce(algorithm)

    if algorithm is Algorithm.PBKDF2:
        return await pbkdf2_verify(given, encoded_hash, **params)
    return await _DISPATCH_VERIFY[algorithm](given, encoded_hash)


@track_operation("verify_and_upgrade", "dispatch")
async def verify_and_upgrade(
    given: Union[str, bytes],
    encoded_hash: str,
    algorithm: Union[Algorithm, str] = Algorithm.ARGON2,
    **params,
) -> Tuple[bool, Optional[str]]:
    """
    Verify a password and return a new hash if it should be upgraded.

    This is the recommended function for login flows.

    Args:
        given: Plain text password
        encoded_hash: Existing bcrypt or Argon2 hash
        algorithm: Target algorithm (bcrypt or Argon2)
        **params: Target parameters (``rounds`` or ``options``)

    Returns:
        Tuple of (is_valid, new_hash_or_none)
    """
    is_valid = await verify_password(given, encoded_hash)

    if not is_valid:
        return False, None

    if needs_rehash(encoded_hash, algorithm, **params):
        logger.info("password.rehash", algorithm=Algorithm.coerce(algorithm).value)
        new_hash = await hash_password(given, algorithm, **params)
        return True, new_hash

    return True, None
