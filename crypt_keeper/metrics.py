"""
Operation Metrics
=================
Prometheus metrics for crypt_keeper operations.

Tracks:
- Operation counts by algorithm and outcome
- Operation latency (histogram), mostly interesting for bcrypt/Argon2

Usage:
    from crypt_keeper.metrics import get_metrics_text

    print(get_metrics_text())
"""

import time
from functools import wraps
from typing import Awaitable, Callable, TypeVar

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from .exceptions import InvalidArgument, MalformedHash

T = TypeVar("T")

# Custom registry so embedding applications opt in explicitly
CRYPT_KEEPER_REGISTRY = CollectorRegistry()

OPERATION_TOTAL = Counter(
    name="crypt_keeper_operations_total",
    documentation="Total number of crypt_keeper operations",
    labelnames=["operation", "algorithm", "status"],
    registry=CRYPT_KEEPER_REGISTRY,
)

OPERATION_LATENCY = Histogram(
    name="crypt_keeper_operation_duration_seconds",
    documentation="Time spent in crypt_keeper operations",
    labelnames=["operation", "algorithm"],
    buckets=[
        0.0005, 0.001, 0.005, 0.01, 0.025, 0.05,
        0.1, 0.25, 0.5, 1.0, 2.5, 5.0,
    ],
    registry=CRYPT_KEEPER_REGISTRY,
)


def record_operation(
    operation: str,
    algorithm: str,
    status: str,
    duration_seconds: float,
) -> None:
    """
    Record metrics for one operation.

    Args:
        operation: Public operation name (e.g. bcrypt_hash)
        algorithm: Algorithm label (e.g. bcrypt, sha256, none)
        status: success, invalid_argument, malformed_hash or error
        duration_seconds: Wall-clock duration
    """
    OPERATION_TOTAL.labels(
        operation=operation,
        algorithm=algorithm,
        status=status,
    ).inc()
    OPERATION_LATENCY.labels(
        operation=operation,
        algorithm=algorithm,
    ).observe(duration_seconds)


def track_operation(operation: str, algorithm: str = "none"):
    """
    Decorator to record count and latency of an async operation.

    Example:
        @track_operation("bcrypt_hash", "bcrypt")
        async def bcrypt_hash(value, rounds):
            ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            start = time.perf_counter()
            status = "success"

            try:
                return await func(*args, **kwargs)
            except InvalidArgument:
                status = "invalid_argument"
                raise
            except MalformedHash:
                status = "malformed_hash"
                raise
            except Exception:
                status = "error"
                raise
            finally:
                record_operation(
                    operation,
                    algorithm,
                    status,
                    time.perf_counter() - start,
                )

        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Get metrics in Prometheus text format."""
    return generate_latest(CRYPT_KEEPER_REGISTRY).decode("utf-8")
