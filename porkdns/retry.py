"""Retry executor with exponential backoff and failure classification.

The record API signals two kinds of failure: a body whose ``status`` is not
``SUCCESS`` (the request was understood and refused, so retrying cannot help)
and a non-200 HTTP status. Rate limiting shows up as a 503, which is the only
status code retried by default. Any other exception is retried until the
attempts run out.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from porkdns.providers.dns.base import ServerError, StatusError

logger = logging.getLogger(__name__)

T = TypeVar("T")

INITIAL_DELAY = 10.0  # seconds
BACKOFF_MULTIPLIER = 2
DEFAULT_RETRYABLE_CODES = frozenset({503})


class ErrorClassification(str, Enum):
    """Outcome of inspecting a failed attempt."""

    RETRYABLE = "retryable"
    TERMINAL_STATUS = "terminal_status"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to run an operation and how long to wait in between."""

    max_attempts: int
    initial_delay: float = INITIAL_DELAY
    retryable_codes: frozenset[int] = DEFAULT_RETRYABLE_CODES

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


class RetryError(Exception):
    """Base class for errors raised by retry()."""


class TerminalError(RetryError):
    """An attempt failed in a way that retrying cannot fix."""


class RetryExhaustedError(RetryError):
    """Every attempt failed."""

    def __init__(self, attempts: int, last_error: BaseException):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"after {attempts} attempts, last error: {last_error}")


class RetryCancelledError(RetryError):
    """The cancel event was set before the operation succeeded."""


def classify(
    error: BaseException, retryable_codes: frozenset[int] = DEFAULT_RETRYABLE_CODES
) -> ErrorClassification:
    """Classify a failure raised by a record API call."""
    if isinstance(error, StatusError):
        if error.status != "SUCCESS":
            return ErrorClassification.TERMINAL_STATUS
        return ErrorClassification.UNCLASSIFIED
    if isinstance(error, ServerError):
        if error.status_code in retryable_codes:
            return ErrorClassification.RETRYABLE
        return ErrorClassification.TERMINAL_STATUS
    return ErrorClassification.UNCLASSIFIED


def _terminal_message(error: BaseException) -> str:
    if isinstance(error, StatusError):
        return f"cannot be retried: {error}"
    return f"received error is not retryable: {error}"


def _wait(
    delay: float,
    cancel: threading.Event | None,
    sleep: Callable[[float], None],
) -> None:
    if cancel is None:
        sleep(delay)
        return
    if cancel.wait(delay):
        raise RetryCancelledError(f"cancelled while waiting {delay:g}s before retrying")


def retry(
    operation: Callable[[], T],
    policy: RetryPolicy,
    *,
    cancel: threading.Event | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation`` until it succeeds or ``policy`` says to stop.

    Args:
        operation: Zero-argument callable; raising means the attempt failed
        policy: Attempt limit, initial delay and retryable status codes
        cancel: Optional event that aborts the backoff wait when set
        sleep: Wait function used when no cancel event is given

    Returns:
        The result of the first successful attempt

    Raises:
        TerminalError: A failure was classified as terminal
        RetryExhaustedError: All attempts failed
        RetryCancelledError: ``cancel`` was set
    """
    delay = policy.initial_delay
    last_error: Exception | None = None

    for attempt in range(1, policy.max_attempts + 1):
        if attempt > 1:
            logger.info("Waiting %gs before attempt %d", delay, attempt)
            _wait(delay, cancel, sleep)
            delay *= BACKOFF_MULTIPLIER
        if cancel is not None and cancel.is_set():
            raise RetryCancelledError(f"cancelled before attempt {attempt}")

        try:
            return operation()
        except Exception as e:
            last_error = e

        classification = classify(last_error, policy.retryable_codes)
        logger.warning(
            "Attempt %d/%d failed (%s): %s",
            attempt,
            policy.max_attempts,
            classification.value,
            last_error,
        )
        if classification is ErrorClassification.TERMINAL_STATUS:
            raise TerminalError(_terminal_message(last_error)) from last_error

    raise RetryExhaustedError(policy.max_attempts, last_error) from last_error
