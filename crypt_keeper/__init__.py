"""
Crypt Keeper
============
One namespace for encoding, randomness, HMAC and password hashing.

Every operation is a coroutine function; await it to get the result or the
error (InvalidArgument, MalformedHash, PrimitiveFailure).
"""

__version__ = "1.0.0"

# Errors
from crypt_keeper.exceptions import (
    CryptKeeperError,
    InvalidArgument,
    PrimitiveFailure,
    MalformedHash,
)

# Configuration
from crypt_keeper.config import KeeperConfig, get_config, configure, reset_config

# Codec
from crypt_keeper.codec import base64_encode, base64_decode

# Random Source
from crypt_keeper.randomness import (
    random_bytes,
    random_hex,
    random_base64,
    random_number,
    generate_v4_uuid,
)

# Keyed Hashing
from crypt_keeper.keyed import (
    HmacAlgorithm,
    hmac_digest,
    hmac_md5,
    hmac_sha1,
    hmac_sha256,
    hmac_verify,
)

# Password Hashing
from crypt_keeper.password import (
    Algorithm,
    Argon2Variant,
    Argon2Options,
    pbkdf2_hash,
    pbkdf2_verify,
    bcrypt_hash,
    bcrypt_compare,
    argon_hash,
    argon_compare,
    hash_password,
    verify_password,
    verify_and_upgrade,
    identify_hash,
    needs_rehash,
    hash_password_sync,
    verify_password_sync,
)

# Metrics
from crypt_keeper.metrics import get_metrics_text

__all__ = [
    # Errors
    "CryptKeeperError",
    "InvalidArgument",
    "PrimitiveFailure",
    "MalformedHash",
    # Configuration
    "KeeperConfig",
    "get_config",
    "configure",
    "reset_config",
    # Codec
    "base64_encode",
    "base64_decode",
    # Random Source
    "random_bytes",
    "random_hex",
    "random_base64",
    "random_number",
    "generate_v4_uuid",
    # Keyed Hashing
    "HmacAlgorithm",
    "hmac_digest",
    "hmac_md5",
    "hmac_sha1",
    "hmac_sha256",
    "hmac_verify",
    # Password Hashing
    "Algorithm",
    "Argon2Variant",
    "Argon2Options",
    "pbkdf2_hash",
    "pbkdf2_verify",
    "bcrypt_hash",
    "bcrypt_compare",
    "argon_hash",
    "argon_compare",
    "hash_password",
    "verify_password",
    "verify_and_upgrade",
    "identify_hash",
    "needs_rehash",
    "hash_password_sync",
    "verify_password_sync",
    # Metrics
    "get_metrics_text",
]
