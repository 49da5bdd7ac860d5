"""
Blocking Call Runner
====================
Dispatches CPU-expensive primitives (bcrypt, Argon2) to a thread pool so
they never block the event loop.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache, partial
from typing import Callable, Optional, TypeVar

from .config import get_config

T = TypeVar("T")


@lru_cache(maxsize=4)
def _get_executor(max_workers: int) -> ThreadPoolExecutor:
    """Cached dedicated pool per worker count."""
    return ThreadPoolExecutor(
        max_workers=max_workers,
        thread_name_prefix="crypt-keeper",
    )


def get_executor() -> Optional[ThreadPoolExecutor]:
    """Executor for blocking calls; None means the loop's default executor."""
    workers = get_config().executor_workers
    if workers is None:
        return None
    return _get_executor(workers)


async def run_blocking(func: Callable[..., T], *args, **kwargs) -> T:
    """
    Run a blocking callable in the worker pool and await its result.

    Exceptions raised by func propagate to the awaiting caller unchanged.
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(get_executor(), partial(func, *args, **kwargs))
