"""
Password Hashing Models
=======================
Enums and parameter objects for the password hashing strategies.
"""

from collections import abc
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Optional, Union

from argon2 import Type

from ..config import KeeperConfig
from ..exceptions import InvalidArgument
from ..validation import require, require_positive_int


class Algorithm(str, Enum):
    """Password hashing strategies."""
    PBKDF2 = "pbkdf2"
    BCRYPT = "bcrypt"
    ARGON2 = "argon2"

    @classmethod
    def coerce(cls, value: Union["Algorithm", str]) -> "Algorithm":
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgument(
                "algorithm must be one of pbkdf2, bcrypt, argon2",
                argument="algorithm",
            ) from None


class Argon2Variant(str, Enum):
    """Argon2 variants."""
    ARGON2D = "argon2d"
    ARGON2I = "argon2i"
    ARGON2ID = "argon2id"

    @property
    def type(self) -> Type:
        return {
            Argon2Variant.ARGON2D: Type.D,
            Argon2Variant.ARGON2I: Type.I,
            Argon2Variant.ARGON2ID: Type.ID,
        }[self]

    @classmethod
    def coerce(cls, value: Union["Argon2Variant", Type, str, int]) -> "Argon2Variant":
        """Accepts names ("argon2id", "id"), argon2.Type members or their ints (0=d, 1=i, 2=id)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Type):
            value = int(value.value)
        if isinstance(value, int) and not isinstance(value, bool):
            by_number = {0: cls.ARGON2D, 1: cls.ARGON2I, 2: cls.ARGON2ID}
            if value in by_number:
                return by_number[value]
        elif isinstance(value, str):
            name = value.lower()
            if not name.startswith("argon2"):
                name = f"argon2{name}"
            try:
                return cls(name)
            except ValueError:
                pass
        raise InvalidArgument(
            "variant must be one of argon2d, argon2i, argon2id",
            argument="variant",
        )


@dataclass(frozen=True)
class Argon2Parameters:
    """Fully resolved Argon2 cost parameters (memory_cost in KiB)."""
    time_cost: int
    memory_cost: int
    parallelism: int
    hash_len: int
    salt_len: int
    variant: Argon2Variant


@dataclass
class Argon2Options:
    """
    Caller-supplied Argon2 options.

    Unset fields fall back to KeeperConfig. memory_cost is the log2 of the
    memory size in KiB (16 means 64MB).
    """
    variant: Optional[Argon2Variant] = None
    time_cost: Optional[int] = None
    memory_cost: Optional[int] = None
    parallelism: Optional[int] = None
    hash_len: Optional[int] = None
    salt_len: Optional[int] = None

    # camelCase keys accepted by from_mapping
    _ALIASES = {
        "type": "variant",
        "timeCost": "time_cost",
        "memoryCost": "memory_cost",
        "hashLength": "hash_len",
        "saltLength": "salt_len",
        "hash_length": "hash_len",
        "salt_length": "salt_len",
    }

    def __post_init__(self):
        if self.variant is not None:
            self.variant = Argon2Variant.coerce(self.variant)
        for name in ("time_cost", "memory_cost", "parallelism", "hash_len", "salt_len"):
            if getattr(self, name) is not None:
                require_positive_int(getattr(self, name), name)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Argon2Options":
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in mapping.items():
            name = cls._ALIASES.get(key, key)
            if name not in known:
                raise InvalidArgument(f"unknown argon2 option: {key}", argument="options")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def coerce(
        cls,
        options: Union["Argon2Options", Mapping[str, Any], None],
    ) -> "Argon2Options":
        """None means defaults."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, abc.Mapping):
            return cls.from_mapping(options)
        raise InvalidArgument("options must be a mapping or Argon2Options", argument="options")

    def resolve(self, config: KeeperConfig) -> Argon2Parameters:
        memory_log2 = self.memory_cost if self.memory_cost is not None else config.argon2_memory_cost
        if memory_log2 > 31:
            raise InvalidArgument("memory_cost is a log2 value and must be <= 31", argument="memory_cost")

        def pick(value, default):
            return value if value is not None else default

        return Argon2Parameters(
            time_cost=pick(self.time_cost, config.argon2_time_cost),
            memory_cost=2 ** memory_log2,
            parallelism=pick(self.parallelism, config.argon2_parallelism),
            hash_len=pick(self.hash_len, config.argon2_hash_len),
            salt_len=pick(self.salt_len, config.argon2_salt_len),
            variant=pick(self.variant, Argon2Variant.coerce(config.argon2_variant)),
        )


@dataclass(frozen=True)
class Pbkdf2Params:
    """
    PBKDF2 parameters.

    ``rounds`` is an exponent: the iteration count is ``2 ** rounds``.
    """
    salt: Union[str, bytes]
    rounds: int
    key_length: int = 56
    digest: str = "sha512"
    encoding: str = "base64"

    def __post_init__(self):
        require(self.salt, "salt")
        require_positive_int(self.rounds, "rounds")
        require_positive_int(self.key_length, "key_length")
        require(self.digest, "digest")
        require(self.encoding, "encoding")

    @property
    def iterations(self) -> int:
        return 2 ** self.rounds
