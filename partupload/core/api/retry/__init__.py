"""Retry strategies using Strategy Pattern."""
from .retry_strategy import (
    RetryStrategy,
    LinearBackoffStrategy,
    with_retry,
    is_retryable,
    retry_all,
)

__all__ = [
    'RetryStrategy',
    'LinearBackoffStrategy',
    'with_retry',
    'is_retryable',
    'retry_all',
]
