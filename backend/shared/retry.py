"""
Bounded retry combinator.

Used wherever a row may legitimately not exist yet (for example a profile
created by a database trigger shortly after sign-up). An attempt fails when
the operation returns None or raises; the combinator never raises itself.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DelayStrategy = Callable[[int], float]


def fixed_delay(seconds: float) -> DelayStrategy:
    """Same pause after every failed attempt."""
    return lambda attempt: seconds


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Result of a retried operation: a value, or exhaustion."""

    value: Optional[T]
    attempts: int
    last_error: Optional[BaseException] = None

    @property
    def exhausted(self) -> bool:
        return self.value is None


async def retry(
    operation: Callable[[], Awaitable[Optional[T]]],
    max_attempts: int,
    delay: DelayStrategy = fixed_delay(1.0),
    *,
    label: str = "operation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RetryOutcome[T]:
    """
    Run ``operation`` until it yields a value or the budget is spent.

    Args:
        operation: Zero-argument coroutine factory.
        max_attempts: Total number of attempts (at least one is made).
        delay: Maps the 1-based number of the failed attempt to a pause in
            seconds. No pause follows the final attempt.
        label: Name used in log messages.
        sleep: Injected for tests.

    Returns:
        RetryOutcome with the value, or ``exhausted`` set.
    """
    attempts = max(1, max_attempts)
    last_error: Optional[BaseException] = None

    for attempt in range(1, attempts + 1):
        try:
            value = await operation()
        except Exception as e:
            last_error = e
            logger.warning(f"{label} failed on attempt {attempt}/{attempts}: {e}")
        else:
            if value is not None:
                return RetryOutcome(value=value, attempts=attempt)
            logger.debug(f"{label} returned nothing on attempt {attempt}/{attempts}")

        if attempt < attempts:
            await sleep(delay(attempt))

    return RetryOutcome(value=None, attempts=attempts, last_error=last_error)
