"""
Crypt Keeper Configuration
==========================
Defaults for cost parameters, encodings and the worker pool.

Nothing is read from the environment unless ``KeeperConfig.from_env`` is
called explicitly.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .exceptions import InvalidArgument


@dataclass(frozen=True)
class KeeperConfig:
    """Library-wide defaults."""
    # Argon2 (argon2-cffi defaults, memory cost as log2 of KiB)
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 16  # 2**16 KiB = 64MB
    argon2_parallelism: int = 4
    argon2_hash_len: int = 32
    argon2_salt_len: int = 16
    argon2_variant: str = "argon2id"

    # PBKDF2
    pbkdf2_key_length: int = 56
    pbkdf2_digest: str = "sha512"
    pbkdf2_encoding: str = "base64"

    # HMAC
    hmac_encoding: str = "hex"

    # None = asyncio default executor
    executor_workers: Optional[int] = None

    @classmethod
    def from_env(cls, prefix: str = "CRYPT_KEEPER_") -> "KeeperConfig":
        """
        Build a config from environment variables.

        Each field maps to ``<prefix><FIELD_NAME>``, e.g.
        ``CRYPT_KEEPER_ARGON2_TIME_COST=4``. Unset variables keep the default.
        """
        overrides = {}
        for field in fields(cls):
            raw = os.environ.get(f"{prefix}{field.name.upper()}")
            if raw is None or raw == "":
                continue
            if field.type is int or field.type == Optional[int]:
                try:
                    overrides[field.name] = int(raw)
                except ValueError:
                    raise InvalidArgument(
                        f"{prefix}{field.name.upper()} must be an integer",
                        argument=field.name,
                    ) from None
            else:
                overrides[field.name] = raw
        return replace(cls(), **overrides)


_active_config: Optional[KeeperConfig] = None


def get_config() -> KeeperConfig:
    """Get the active configuration."""
    global _active_config
    if _active_config is None:
        _active_config = KeeperConfig()
    return _active_config


def _clear_cached_strategies() -> None:
    # Imported here, the hashers module depends on this one
    from .password.hasher import _get_cached_strategy, get_cached_argon2_hasher

    _get_cached_strategy.cache_clear()
    get_cached_argon2_hasher.cache_clear()


def configure(config: Optional[KeeperConfig] = None, **overrides) -> KeeperConfig:
    """
    Replace the active configuration.

    Cached strategies and Argon2 hashers are dropped so the next
    operation picks up the new values.

    Args:
        config: A full config to install (defaults to the current one)
        **overrides: Individual fields to change

    Returns:
        The newly active config
    """
    global _active_config
    base = config or get_config()
    try:
        _active_config = replace(base, **overrides) if overrides else base
    except TypeError as e:
        raise InvalidArgument(str(e), argument="config") from None
    _clear_cached_strategies()
    return _active_config


def reset_config() -> None:
    """Restore library defaults."""
    global _active_config
    _active_config = None
    _clear_cached_strategies()
