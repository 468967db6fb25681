"""
Retry with exponential backoff.

The delay before retry ``n`` (1-based) is ``base_delay * multiplier**(n-1)``,
capped at ``max_delay``, with optional proportional jitter.
"""

import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from nippou.logging import get_logger

logger = get_logger(__name__)


class RetryStrategy(Enum):
    """Available retry strategies."""

    EXPONENTIAL_BACKOFF = "exponential_backoff"
    EXPONENTIAL_BACKOFF_JITTER = "exponential_backoff_jitter"


@dataclass
class RetryPolicy:
    """Configuration for retry behavior.

    ``max_attempts`` counts the first call, so ``max_attempts=4`` means one
    call plus up to three retries. An exception is retried only when
    ``retry_if`` accepts it.
    """

    max_attempts: int = 4
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL_BACKOFF
    base_delay: float = 0.5
    max_delay: float = 30.0
    multiplier: float = 2.0
    jitter_max: float = 0.1
    retry_if: Optional[Callable[[BaseException], bool]] = None

    @classmethod
    def from_retries(
        cls, max_retries: int, base_delay: float, jitter: bool = False, **kwargs
    ) -> "RetryPolicy":
        """Build a policy from a retry count (attempts minus one)."""
        strategy = RetryStrategy.EXPONENTIAL_BACKOFF_JITTER if jitter else RetryStrategy.EXPONENTIAL_BACKOFF
        return cls(max_attempts=max(max_retries, 0) + 1, base_delay=base_delay, strategy=strategy, **kwargs)


class ExponentialBackoffStrategy:
    """Exponential backoff with optional jitter."""

    def __init__(self, multiplier: float = 2.0, jitter: bool = False, jitter_max: float = 0.1):
        self.multiplier = multiplier
        self.jitter = jitter
        self.jitter_max = jitter_max

    def calculate_delay(self, attempt: int, base_delay: float, max_delay: float) -> float:
        """Delay before retry number ``attempt`` (1-based)."""
        delay = min(base_delay * (self.multiplier ** (attempt - 1)), max_delay)

        if self.jitter and delay > 0:
            delay += delay * self.jitter_max * random.random()

        return delay


@dataclass
class RetryAttempt:
    """A failed attempt and the delay scheduled after it."""

    attempt_number: int
    delay: float
    exception: BaseException


class RetryManager:
    """Execute callables under a RetryPolicy.

    ``sleep`` is injectable so tests can record delays instead of waiting.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.policy = policy or RetryPolicy()
        self.sleep = sleep
        self.backoff = ExponentialBackoffStrategy(
            multiplier=self.policy.multiplier,
            jitter=self.policy.strategy is RetryStrategy.EXPONENTIAL_BACKOFF_JITTER,
            jitter_max=self.policy.jitter_max,
        )
        self.attempts: List[RetryAttempt] = []

    def execute(self, func: Callable, *args, **kwargs) -> Any:
        """Call ``func`` until it succeeds or the policy gives up.

        Raises:
            The last exception once retries are exhausted, or the first
            exception the policy does not retry
        """
        self.attempts = []
        name = getattr(func, "__name__", repr(func))

        for attempt in range(1, self.policy.max_attempts + 1):
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if not self.should_retry(e, attempt):
                    if attempt > 1:
                        logger.error(
                            f"{name} failed after {attempt} attempts",
                            exception_type=type(e).__name__,
                        )
                    raise

                delay = self.calculate_delay(attempt)
                self.attempts.append(RetryAttempt(attempt, delay, e))
                logger.warning(
                    f"{name} failed, retrying",
                    exception_type=type(e).__name__,
                    attempt=attempt,
                    max_attempts=self.policy.max_attempts,
                    delay=delay,
                )
                if delay > 0:
                    self.sleep(delay)
                continue

            if attempt > 1:
                logger.info(f"{name} succeeded after {attempt} attempts")
            return result

        # max_attempts < 1 never calls func
        raise ValueError("RetryPolicy.max_attempts must be at least 1")

    def should_retry(self, exception: BaseException, attempt: int) -> bool:
        if attempt >= self.policy.max_attempts or self.policy.retry_if is None:
            return False
        return bool(self.policy.retry_if(exception))

    def calculate_delay(self, attempt: int) -> float:
        return self.backoff.calculate_delay(attempt, self.policy.base_delay, self.policy.max_delay)
