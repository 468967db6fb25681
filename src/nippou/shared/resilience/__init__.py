"""Resilience helpers."""

from .retry import (
    ExponentialBackoffStrategy,
    RetryAttempt,
    RetryManager,
    RetryPolicy,
    RetryStrategy,
)

__all__ = [
    "ExponentialBackoffStrategy",
    "RetryAttempt",
    "RetryManager",
    "RetryPolicy",
    "RetryStrategy",
]
