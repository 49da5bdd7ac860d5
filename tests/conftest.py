"""
Shared fixtures for crypt_keeper tests.
"""

import pytest

from crypt_keeper.config import configure, reset_config


@pytest.fixture(autouse=True)
def fast_argon2():
    """Keep Argon2 cheap in tests: 1 pass, 1MB, 1 lane."""
    configure(
        argon2_time_cost=1,
        argon2_memory_cost=10,
        argon2_parallelism=1,
    )
    yield
    reset_config()


@pytest.fixture
def fast_argon2_options():
    return {"time_cost": 1, "memory_cost": 10, "parallelism": 1}
