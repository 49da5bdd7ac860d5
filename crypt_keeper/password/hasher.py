"""
Password Hashers
================
One strategy per algorithm behind a common ``hash``/``verify`` interface.

Strategies are synchronous and stateless; the async layer dispatches the
slow ones (bcrypt, Argon2) to the worker pool.
"""

import base64
import binascii
import hashlib
import hmac
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Mapping, Optional, Union

import bcrypt
import structlog
from argon2 import PasswordHasher, extract_parameters
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from ..codec import decode_bytes, encode_bytes
from ..config import get_config
from ..exceptions import InvalidArgument, MalformedHash, PrimitiveFailure
from ..validation import ensure_bytes, require, require_positive_int
from .models import Algorithm, Argon2Options, Argon2Parameters, Pbkdf2Params

logger = structlog.get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
ARGON2_PREFIX = "$argon2"

# libargon2 lower bounds for the encoded salt and digest
ARGON2_MIN_SALT_LEN = 8
ARGON2_MIN_HASH_LEN = 4


def _decode_argon2_segment(segment: str) -> bytes:
    """Strictly decode an unpadded base64 segment of an argon2 hash."""
    if not segment:
        raise ValueError("empty segment")
    return base64.b64decode(segment + "=" * (-len(segment) % 4), validate=True)


def _is_decode_error(error: VerificationError) -> bool:
    message = str(error).lower()
    return "decoding failed" in message or "too short" in message or "too long" in message


class PasswordStrategy(ABC):
    """Common interface for password hashing strategies."""

    algorithm: Algorithm

    @abstractmethod
    def hash(self, value: Union[str, bytes], **params) -> str:
        """Hash value and return the encoded hash."""

    @abstractmethod
    def verify(self, given: Union[str, bytes], encoded_hash: str, **params) -> bool:
        """Return True if given matches encoded_hash."""

    def identify(self, encoded_hash: str) -> bool:
        """Whether encoded_hash looks like one this strategy produced."""
        return False

    def needs_rehash(self, encoded_hash: str, **params) -> bool:
        """Whether encoded_hash should be recomputed with params."""
        return not self.identify(encoded_hash)


class Pbkdf2Strategy(PasswordStrategy):
    """
    PBKDF2-HMAC.

    Output is a bare digest; the caller keeps salt and parameters. Iteration
    count is 2 ** rounds.
    """

    algorithm = Algorithm.PBKDF2

    def _params(self, salt, rounds, key_length, digest, encoding) -> Pbkdf2Params:
        config = get_config()
        return Pbkdf2Params(
            salt=salt,
            rounds=rounds,
            key_length=key_length if key_length is not None else config.pbkdf2_key_length,
            digest=digest or config.pbkdf2_digest,
            encoding=encoding or config.pbkdf2_encoding,
        )

    def _derive(self, value: Union[str, bytes], params: Pbkdf2Params) -> bytes:
        password = ensure_bytes(value, "value")
        salt = ensure_bytes(params.salt, "salt")
        try:
            return hashlib.pbkdf2_hmac(
                params.digest,
                password,
                salt,
                params.iterations,
                dklen=params.key_length,
            )
        except (ValueError, OverflowError) as e:
            logger.warning("pbkdf2.primitive_failure", digest=params.digest, error=type(e).__name__)
            raise PrimitiveFailure(
                f"pbkdf2 failed for digest {params.digest}",
                cause=e,
            ) from e

    def hash(
        self,
        value: Union[str, bytes],
        salt: Union[str, bytes] = None,
        rounds: int = None,
        key_length: Optional[int] = None,
        digest: Optional[str] = None,
        encoding: Optional[str] = None,
    ) -> str:
        require(value, "value")
        params = self._params(salt, rounds, key_length, digest, encoding)
        logger.debug(
            "pbkdf2.hash",
            iterations=params.iterations,
            key_length=params.key_length,
            digest=params.digest,
        )
        return encode_bytes(self._derive(value, params), params.encoding)

    def verify(
        self,
        given: Union[str, bytes],
        encoded_hash: str,
        salt: Union[str, bytes] = None,
        rounds: int = None,
        key_length: Optional[int] = None,
        digest: Optional[str] = None,
        encoding: Optional[str] = None,
    ) -> bool:
        require(given, "given")
        require(encoded_hash, "hash")
        if not isinstance(encoded_hash, str):
            raise InvalidArgument("hash must be a string", argument="hash")
        params = self._params(salt, rounds, key_length, digest, encoding)

        expected = decode_bytes(encoded_hash, params.encoding)
        return hmac.compare_digest(self._derive(given, params), expected)


class BcryptStrategy(PasswordStrategy):
    """bcrypt with an embedded per-hash salt."""

    algorithm = Algorithm.BCRYPT

    def hash(self, value: Union[str, bytes], rounds: int = None) -> str:
        password = ensure_bytes(value, "value")
        rounds = require_positive_int(rounds, "rounds")
        logger.debug("bcrypt.hash", rounds=rounds)
        try:
            salt = bcrypt.gensalt(rounds=rounds)
            return bcrypt.hashpw(password, salt).decode("ascii")
        except ValueError as e:
            logger.warning("bcrypt.primitive_failure", rounds=rounds, error=type(e).__name__)
            raise PrimitiveFailure("bcrypt rejected the hashing parameters", cause=e) from e

    def verify(self, given: Union[str, bytes], encoded_hash: str) -> bool:
        password = ensure_bytes(given, "given")
        hashed = ensure_bytes(encoded_hash, "hash")
        try:
            return bcrypt.checkpw(password, hashed)
        except ValueError:
            # Malformed and foreign hashes compare as a plain mismatch
            logger.debug("bcrypt.unparsable_hash")
            return False

    def identify(self, encoded_hash: str) -> bool:
        return isinstance(encoded_hash, str) and encoded_hash.startswith(BCRYPT_PREFIXES)

    def cost(self, encoded_hash: str) -> Optional[int]:
        """Cost factor embedded in a bcrypt hash, or None."""
        if not self.identify(encoded_hash):
            return None
        parts = encoded_hash.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return None
        return int(parts[2])

    def needs_rehash(self, encoded_hash: str, rounds: int = None) -> bool:
        rounds = require_positive_int(rounds, "rounds")
        cost = self.cost(encoded_hash)
        return cost is None or cost < rounds


@lru_cache(maxsize=16)
def get_cached_argon2_hasher(parameters: Argon2Parameters) -> PasswordHasher:
    """Get a cached argon2-cffi hasher for the given parameters."""
    return PasswordHasher(
        time_cost=parameters.time_cost,
        memory_cost=parameters.memory_cost,
        parallelism=parameters.parallelism,
        hash_len=parameters.hash_len,
        salt_len=parameters.salt_len,
        type=parameters.variant.type,
    )


OptionsLike = Union[Argon2Options, Mapping[str, Any], None]


class Argon2Strategy(PasswordStrategy):
    """
    Argon2 (d, i or id) via argon2-cffi.

    A fresh salt is generated for every hash; verification reads variant,
    version, parameters and salt from the encoded hash.
    """

    algorithm = Algorithm.ARGON2

    def _hasher(self, options: OptionsLike) -> PasswordHasher:
        parameters = Argon2Options.coerce(options).resolve(get_config())
        return get_cached_argon2_hasher(parameters)

    def hash(self, value: Union[str, bytes], options: OptionsLike = None) -> str:
        password = ensure_bytes(value, "value")
        hasher = self._hasher(options)
        logger.debug(
            "argon2.hash",
            variant=hasher.type.name,
            time_cost=hasher.time_cost,
            memory_cost=hasher.memory_cost,
            parallelism=hasher.parallelism,
        )
        try:
            return hasher.hash(password)
        except HashingError as e:
            logger.warning("argon2.primitive_failure", error=str(e))
            raise PrimitiveFailure("argon2 rejected the hashing parameters", cause=e) from e

    def _check_format(self, encoded_hash: str) -> None:
        if not isinstance(encoded_hash, str):
            raise InvalidArgument("hash must be a string", argument="hash")
        if not encoded_hash.startswith(ARGON2_PREFIX) or not encoded_hash.isascii():
            raise MalformedHash("hash is not an argon2 encoded hash")
        try:
            extract_parameters(encoded_hash)
            salt_b64, digest_b64 = encoded_hash.split("$")[-2:]
            salt = _decode_argon2_segment(salt_b64)
            digest = _decode_argon2_segment(digest_b64)
        except (InvalidHashError, binascii.Error, ValueError) as e:
            raise MalformedHash("hash is not an argon2 encoded hash") from e
        if len(salt) < ARGON2_MIN_SALT_LEN or len(digest) < ARGON2_MIN_HASH_LEN:
            raise MalformedHash("hash is not an argon2 encoded hash")

    def verify(self, given: Union[str, bytes], encoded_hash: str) -> bool:
        password = ensure_bytes(given, "given")
        require(encoded_hash, "hash")
        try:
            self._check_format(encoded_hash)
        except MalformedHash:
            logger.warning("argon2.malformed_hash")
            raise

        hasher = self._hasher(None)
        try:
            return hasher.verify(encoded_hash, password)
        except VerifyMismatchError:
            return False
        except InvalidHashError as e:
            logger.warning("argon2.malformed_hash")
            raise MalformedHash("hash is not an argon2 encoded hash") from e
        except VerificationError as e:
            if _is_decode_error(e):
                logger.warning("argon2.malformed_hash")
                raise MalformedHash("hash is not an argon2 encoded hash") from e
            logger.warning("argon2.primitive_failure", error=str(e))
            raise PrimitiveFailure("argon2 verification failed", cause=e) from e

    def identify(self, encoded_hash: str) -> bool:
        return isinstance(encoded_hash, str) and encoded_hash.startswith(ARGON2_PREFIX)

    def needs_rehash(self, encoded_hash: str, options: OptionsLike = None) -> bool:
        if not self.identify(encoded_hash):
            return True
        try:
            return self._hasher(options).check_needs_rehash(encoded_hash)
        except InvalidHashError:
            return True


_STRATEGIES = {
    Algorithm.PBKDF2: Pbkdf2Strategy,
    Algorithm.BCRYPT: BcryptStrategy,
    Algorithm.ARGON2: Argon2Strategy,
}


@lru_cache(maxsize=None)
def _get_cached_strategy(algorithm: Algorithm) -> PasswordStrategy:
    return _STRATEGIES[algorithm]()


def get_strategy(algorithm: Union[Algorithm, str]) -> PasswordStrategy:
    """Get the (cached, stateless) strategy for an algorithm tag."""
    return _get_cached_strategy(Algorithm.coerce(algorithm))
