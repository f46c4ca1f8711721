"""HTTP configuration and retry policy for the upload client."""
from .config import (
    UploaderConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    DEFAULT_APP_NAME,
    DEFAULT_CONTENT_TYPE,
)
from .retry import (
    RetryStrategy,
    LinearBackoffStrategy,
    with_retry,
    is_retryable,
    retry_all,
)

__all__ = [
    'UploaderConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'DEFAULT_APP_NAME',
    'DEFAULT_CONTENT_TYPE',
    'RetryStrategy',
    'LinearBackoffStrategy',
    'with_retry',
    'is_retryable',
    'retry_all',
]
