"""Generic retry-with-backoff combinator."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class RetryState:
    """Per-call bookkeeping; never shared between calls."""
    attempt: int = 0
    last_error: Optional[BaseException] = None
    delay: float = 0.0


def linear_backoff(step: float = 1.0) -> Callable[[int], float]:
    """Delay of ``attempt * step`` seconds after the given (1-based) attempt."""
    def delay(attempt: int) -> float:
        return attempt * step
    return delay


def retry_with_backoff(operation: Callable[[], T],
                       max_attempts: int = 3,
                       delay: Callable[[int], float] = linear_backoff(),
                       retry_on: Tuple[Type[BaseException], ...] = (Exception,),
                       sleep: Callable[[float], None] = time.sleep,
                       on_retry: Optional[Callable[[RetryState], None]] = None,
                       description: str = "operation") -> T:
    """
    Call ``operation`` until it succeeds or ``max_attempts`` is reached.

    Args:
        operation: Zero-argument callable to run
        max_attempts: Total number of attempts (not retries)
        delay: Maps the failed attempt number to the wait before the next one
        retry_on: Exception types that trigger another attempt; others propagate
        sleep: Blocking wait function, injectable for tests
        on_retry: Called with the current state after each failed attempt
        description: Label used in log messages

    Returns:
        The first successful result

    Raises:
        The exception from the final attempt once attempts are exhausted
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    state = RetryState()
    while True:
        state.attempt += 1
        try:
            return operation()
        except retry_on as e:
            state.last_error = e
            if on_retry:
                on_retry(state)
            if state.attempt >= max_attempts:
                logger.warning(f"{description} failed after {state.attempt} attempts: {str(e)}")
                raise
            state.delay = delay(state.attempt)
            logger.info(
                f"{description} attempt {state.attempt}/{max_attempts} failed ({str(e)}); "
                f"retrying in {state.delay:.1f}s"
            )
            sleep(state.delay)
