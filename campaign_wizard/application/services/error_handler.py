"""
Retry with exponential backoff for persistence calls.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry mechanisms."""
    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_factor: float = 2.0
    jitter: bool = True
    retry_on: List[Type[BaseException]] = field(default_factory=lambda: [Exception])
    dont_retry_on: List[Type[BaseException]] = field(default_factory=list)


class RetryExhaustedError(Exception):
    """Raised when every attempt failed; wraps the last failure."""

    def __init__(self, last_error: Exception, attempts: int):
        super().__init__(f"Gave up after {attempts} attempt(s): {last_error}")
        self.last_error = last_error
        self.attempts = attempts


def should_retry_exception(exception: BaseException, config: RetryConfig) -> bool:
    """Determine if an exception should be retried."""
    for exc_type in config.dont_retry_on:
        if isinstance(exception, exc_type):
            return False

    for exc_type in config.retry_on:
        if isinstance(exception, exc_type):
            return True

    return False


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay for exponential backoff."""
    delay = config.base_delay * (config.exponential_factor ** attempt)
    delay = min(delay, config.max_delay)

    if config.jitter:
        delay *= (0.5 + random.random() * 0.5)

    return delay


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    config: Optional[RetryConfig] = None,
) -> Tuple[T, int]:
    """
    Await ``func`` until it succeeds or attempts run out.

    Returns the result and the number of attempts used. Exceptions that
    are not retryable propagate unchanged; once attempts are exhausted
    the last failure is wrapped in RetryExhaustedError.
    """
    if config is None:
        config = RetryConfig()

    attempts = max(1, config.max_attempts)
    last_exception: Optional[Exception] = None

    for attempt in range(attempts):
        try:
            return await func(), attempt + 1
        except Exception as e:
            if not should_retry_exception(e, config):
                raise
            last_exception = e

            if attempt < attempts - 1:
                delay = calculate_delay(attempt, config)
                logger.warning(f"Attempt {attempt + 1} failed, retrying in {delay:.2f}s: {e}")
                await asyncio.sleep(delay)

    raise RetryExhaustedError(last_exception, attempts)
