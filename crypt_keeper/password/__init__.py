"""
Crypt Keeper - Password Hashing
===============================
PBKDF2, bcrypt and Argon2 behind one ``hash``/``verify`` interface.

- PBKDF2: caller-supplied salt, iterations = 2 ** rounds, bare digest output
- bcrypt: linear cost factor, salt embedded in the hash
- Argon2: d/i/id variants, salt embedded in the hash

bcrypt and Argon2 are CPU/memory expensive by design and run in a thread
pool executor so the event loop is never blocked.
"""

from .models import Algorithm, Argon2Variant, Argon2Options, Argon2Parameters, Pbkdf2Params
from .hasher import (
    PasswordStrategy,
    Pbkdf2Strategy,
    BcryptStrategy,
    Argon2Strategy,
    get_strategy,
    get_cached_argon2_hasher,
)
from .async_ops import (
    pbkdf2_hash,
    pbkdf2_verify,
    bcrypt_hash,
    bcrypt_compare,
    argon_hash,
    argon_compare,
    hash_password,
    verify_password,
    verify_and_upgrade,
)
from .utils import identify_hash, needs_rehash
from .sync_ops import hash_password_sync, verify_password_sync

__all__ = [
    # Models
    "Algorithm",
    "Argon2Variant",
    "Argon2Options",
    "Argon2Parameters",
    "Pbkdf2Params",
    # Strategies
    "PasswordStrategy",
    "Pbkdf2Strategy",
    "BcryptStrategy",
    "Argon2Strategy",
    "get_strategy",
    "get_cached_argon2_hasher",
    # Async Operations
    "pbkdf2_hash",
    "pbkdf2_verify",
    "bcrypt_hash",
    "bcrypt_compare",
    "argon_hash",
    "argon_compare",
    "hash_password",
    "verify_password",
    "verify_and_upgrade",
    # Utils
    "identify_hash",
    "needs_rehash",
    # Sync Operations
    "hash_password_sync",
    "verify_password_sync",
]
