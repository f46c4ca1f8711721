"""Retry strategies using Strategy Pattern."""
import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, TypeVar

import aiohttp

from ...exceptions import ExhaustedRetriesError, TransientTransferError
from ...logging import get_logger
from ..config import RetryConfig

T = TypeVar('T')

logger = get_logger('retry')

RETRYABLE_STATUSES = frozenset({408, 429})


def is_retryable(error: BaseException) -> bool:
    """
    Transient-only retry predicate.
    
    Retries network failures, timeouts, HTTP 408/429 and 5xx responses.
    Other 4xx responses (bad request, auth) and local errors are final.
    """
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status in RETRYABLE_STATUSES or error.status >= 500
    if isinstance(error, TransientTransferError):
        return True
    return isinstance(error, (
        aiohttp.ClientConnectionError,
        aiohttp.ClientPayloadError,
        asyncio.TimeoutError,
        ConnectionError,
    ))


def retry_all(error: BaseException) -> bool:
    """Retry predicate that treats every failure as transient."""
    return True


class RetryStrategy(ABC):
    """Abstract retry strategy."""
    
    @abstractmethod
    def is_retryable(self, error: BaseException) -> bool:
        """Determines if an error is transient."""
        pass

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """Determines if a failed attempt should be retried."""
        return attempt < self.max_attempts and self.is_retryable(error)
    
    @abstractmethod
    def delay(self, attempt: int) -> float:
        """Seconds to wait after the given failed attempt."""
        pass
    
    @property
    @abstractmethod
    def max_attempts(self) -> int:
        """Total attempts allowed."""
        pass
    
    async def wait_async(self, attempt: int):
        """Waits before retry (async)."""
        await asyncio.sleep(self.delay(attempt))


class LinearBackoffStrategy(RetryStrategy):
    """
    Linear backoff retry strategy.
    
    With the default config a failing call is attempted 5 times, waiting
    0.5s, 1.0s, 1.5s and 2.0s between attempts. No jitter.
    """
    
    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        predicate: Optional[Callable[[BaseException], bool]] = None
    ):
        """
        Initialize strategy.
        
        Args:
            config: Retry limits and base delay
            predicate: Decides whether an error is worth another attempt;
                defaults to retry_all, or is_retryable when
                ``config.transient_only`` is set
        """
        self._config = config or RetryConfig()
        if predicate is None:
            predicate = is_retryable if self._config.transient_only else retry_all
        self._predicate = predicate
    
    @property
    def config(self) -> RetryConfig:
        """Returns the retry configuration."""
        return self._config
    
    @property
    def max_attempts(self) -> int:
        return self._config.max_attempts
    
    def is_retryable(self, error: BaseException) -> bool:
        return self._predicate(error)
    
    def delay(self, attempt: int) -> float:
        return self._config.calculate_delay(attempt)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    strategy: RetryStrategy,
    part_number: Optional[int] = None
) -> T:
    """
    Run ``fn`` until it succeeds or the strategy gives up.
    
    ``fn`` is called once per attempt, so it must build any request body
    from scratch each time.
    
    Args:
        fn: Zero-argument coroutine factory performing one attempt
        strategy: Retry strategy
        part_number: Part being transferred (for errors and logs)
        
    Returns:
        Result of the first successful attempt
        
    Raises:
        ExhaustedRetriesError: If every allowed attempt failed
        Exception: The original error when the strategy refuses to retry it
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await fn()
        except Exception as e:
            if not strategy.should_retry(e, attempt):
                if not strategy.is_retryable(e):
                    logger.error(f"Part {part_number} failed with non-retryable error: {e!r}")
                    raise
                logger.error(f"Part {part_number} failed after {attempt} attempts: {e!r}")
                raise ExhaustedRetriesError(
                    f"Part {part_number} failed after {attempt} attempts: {e}",
                    part_number=part_number,
                    attempts=attempt,
                    last_error=e
                ) from e
            wait = strategy.delay(attempt)
            logger.warning(
                f"Part {part_number} attempt {attempt}/{strategy.max_attempts} "
                f"failed: {e!r}; retrying in {wait:.2f}s"
            )
            await strategy.wait_async(attempt)
