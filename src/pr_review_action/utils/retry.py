"""
Retry utilities with exponential backoff for handling transient failures.

Every call to the version control host goes through ``retry_with_backoff``.
Delays grow exponentially and use full jitter so that concurrent callers do
not retry in lockstep.
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from pr_review_action.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_DELAY = 1.0
DEFAULT_GROWTH_FACTOR = 2.0


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff configuration shared by all calls to one external capability."""
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_INITIAL_DELAY
    growth_factor: float = DEFAULT_GROWTH_FACTOR
    jitter: bool = True
    max_delay: Optional[float] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay cannot be negative")
        if self.growth_factor < 1:
            raise ValueError("growth_factor must be at least 1")

    def compute_delay(self, attempt: int) -> float:
        """
        Delay to wait after the given 0-based failed attempt.

        With jitter enabled the delay is drawn uniformly from [0, delay].
        """
        delay = self.initial_delay * (self.growth_factor ** attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        if self.jitter:
            delay = random.uniform(0, delay)
        return delay


def is_retryable(exception: Exception) -> bool:
    """Exceptions are retryable unless they say otherwise."""
    return getattr(exception, "retryable", True) is not False


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    policy: Optional[RetryPolicy] = None,
    retry_if: Optional[Callable[[Exception], bool]] = None,
    on_retry: Optional[Callable[[Exception, int, float], None]] = None,
    **kwargs: Any,
) -> T:
    """
    Execute an async function with exponential backoff retry logic.

    Args:
        func: The async function to execute
        *args: Positional arguments to pass to the function
        policy: Backoff configuration (default: 3 attempts, 1s, x2, jitter)
        retry_if: Optional per-call predicate; returning False stops retrying
        on_retry: Optional callback called before each retry with (exception, attempt, delay)
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The result of the function call

    Raises:
        The last exception, unchanged, with an ``attempts`` attribute set to
        the number of attempts made.
    """
    policy = policy or RetryPolicy()
    func_name = getattr(func, "__name__", repr(func))

    for attempt in range(policy.max_attempts):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            attempts_made = attempt + 1
            e.attempts = attempts_made

            should_retry = is_retryable(e) and (retry_if is None or retry_if(e))
            if not should_retry:
                logger.debug(f"Not retrying {func_name}: non-retryable error {e}")
                raise

            if attempts_made == policy.max_attempts:
                logger.error(
                    f"All {policy.max_attempts} attempts failed for {func_name}: {e}"
                )
                raise

            delay = policy.compute_delay(attempt)

            logger.warning(
                f"Attempt {attempts_made}/{policy.max_attempts} failed for {func_name}: {e}. "
                f"Retrying in {delay:.2f}s..."
            )

            if on_retry:
                on_retry(e, attempts_made, delay)

            await asyncio.sleep(delay)

    raise RuntimeError("Unexpected state in retry_with_backoff")

