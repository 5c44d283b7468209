import asyncio
import inspect
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from pokedex.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _status_of(error: BaseException) -> int | None:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    status = getattr(error, "status_code", None)
    # bool is an int subclass, never a status code
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    return None


def should_retry(error: BaseException) -> bool:
    """
    Retries only on 429 (Too Many Requests) and 5xx (server errors).
    Errors without an HTTP status (e.g. connection failures) are not retried.
    """
    status = _status_of(error)
    if status is None:
        return False
    return status == 429 or 500 <= status <= 599


def calculate_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Exponential backoff for a 0-indexed attempt, capped at max_delay."""
    try:
        delay = math.ldexp(base_delay, attempt)
    except OverflowError:
        return max_delay
    return min(delay, max_delay)


@dataclass(frozen=True)
class RetryAttempt:
    """Context handed to the on_retry callback before each wait."""

    attempt: int
    max_attempts: int
    base_delay: float
    max_delay: float
    delay: float
    status_code: int | None


# Sync or async callback; a failing callback never affects the retried operation
RetryCallback = Callable[[RetryAttempt], Awaitable[Any] | None]


class RetryPolicy:
    """
    Executes an async operation, retrying transient upstream failures with
    exponential backoff (no jitter). Delays are in seconds.

    The policy holds no per-call state, so one instance can be shared by
    concurrent requests.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 10.0,
        on_retry: RetryCallback | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if base_delay <= 0:
            raise ValueError("base_delay must be positive")
        if max_delay < base_delay:
            raise ValueError("max_delay must be greater than or equal to base_delay")

        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._on_retry = on_retry
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay_ms / 1000,
            max_delay=settings.retry_max_delay_ms / 1000,
            **kwargs,
        )

    def delay_for(self, attempt: int) -> float:
        return calculate_delay(attempt, self.base_delay, self.max_delay)

    async def _notify(self, retry_attempt: RetryAttempt) -> None:
        if self._on_retry is None:
            return
        try:
            result = self._on_retry(retry_attempt)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("on_retry callback failed")

    async def execute(self, operation: Callable[[], Awaitable[T]], context: str = "") -> T:
        """
        Runs `operation` until it succeeds, fails with a non-retryable error,
        or `max_attempts` is used up. The last error is re-raised as is.
        """
        for attempt in range(self.max_attempts):
            try:
                return await operation()
            except Exception as error:
                is_last_attempt = attempt == self.max_attempts - 1
                if not should_retry(error) or is_last_attempt:
                    raise

                delay = self.delay_for(attempt)
                status = _status_of(error)
                logger.warning(
                    f"{context or 'Request'} failed with status {status or 'unknown'}. "
                    f"Retrying in {delay:.2f}s (attempt {attempt + 1}/{self.max_attempts})"
                )
                await self._notify(
                    RetryAttempt(
                        attempt=attempt,
                        max_attempts=self.max_attempts,
                        base_delay=self.base_delay,
                        max_delay=self.max_delay,
                        delay=delay,
                        status_code=status,
                    )
                )
                await self._sleep(delay)

        # Unreachable: the loop either returns or raises on the last attempt
        raise RuntimeError("retry loop exited without a result")
