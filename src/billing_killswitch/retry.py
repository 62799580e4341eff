"""
Bounded retry with exponential backoff for calls to the Cloud Billing API.

`call_with_retry` takes the operation, a classifier that turns any exception
into a typed error, and a `RetryPolicy`. Only errors whose `retryable` flag is
set are retried; anything else is raised after the first attempt.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from tenacity import RetryCallState, Retrying, retry_if_exception, stop_after_attempt, wait_exponential

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    initial_wait: float = 1.0
    factor: float = 2.0
    max_wait: float = 10.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


DEFAULT_RETRY_POLICY = RetryPolicy()


def _is_retryable(exc: BaseException) -> bool:
    return bool(getattr(exc, "retryable", False))


def call_with_retry(
    operation: Callable[[], T],
    classifier: Callable[[BaseException], BaseException],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    name: Optional[str] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run `operation` under `policy`.

    Args:
        operation: Zero-argument callable performing one attempt.
        classifier: Maps a raised exception to the exception to act on.
        policy: Attempt count and backoff schedule.
        name: Operation name used in log messages.
        sleep: Called with each backoff wait in seconds.

    Returns:
        The operation's result from the first successful attempt.

    Raises:
        The classified error of the last attempt, chained to the original.
    """
    name = name or getattr(operation, "__name__", "operation")

    def attempt() -> T:
        try:
            return operation()
        except Exception as e:
            classified = classifier(e)
            if classified is e:
                raise
            raise classified from e

    def log_failed_attempt(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        retries_left = policy.max_attempts - retry_state.attempt_number
        logging.warning(
            f"Transient error in {name}: {error}. Retry {retry_state.attempt_number} for {name}. "
            f"{retries_left} left."
        )

    def log_backoff(retry_state: RetryCallState) -> None:
        logging.debug(f"Waiting {retry_state.upcoming_sleep}s before retrying {name}.")

    retrying = Retrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_exponential(multiplier=policy.initial_wait, exp_base=policy.factor, max=policy.max_wait),
        retry=retry_if_exception(_is_retryable),
        after=log_failed_attempt,
        before_sleep=log_backoff,
        sleep=sleep,
        reraise=True,
    )

    try:
        return retrying(attempt)
    except Exception as e:
        if _is_retryable(e):
            logging.error(f"Giving up on {name} after {policy.max_attempts} attempts: {e}")
        else:
            logging.error(f"Permanent error in {name}, not retrying: {e}")
        raise
