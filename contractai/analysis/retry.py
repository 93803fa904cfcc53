"""
Retry/backoff controller for completion calls.

  FATAL         -> raise immediately
  RATE_LIMITED  -> sleep rate_limit_cooldown_s, retry (counts against max_attempts only)
  TRANSIENT     -> sleep backoff_base_s * 2**n (n = transient failures so far), retry
After max_attempts failures the last error propagates.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from contractai.llm.errors import ErrorClass, LLMError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Delay schedule. Defaults: 1s, 2s, 4s... for transient failures; 10s after rate limiting."""

    backoff_base_s: float = 1.0
    backoff_max_s: float = 30.0
    rate_limit_cooldown_s: float = 10.0

    def transient_delay(self, n: int) -> float:
        return min(self.backoff_base_s * (2**n), self.backoff_max_s)


def classify_error(exc: BaseException) -> ErrorClass:
    """Typed classification decided by the adapter; unknown failures are transient."""
    if isinstance(exc, LLMError):
        return exc.error_class
    return ErrorClass.TRANSIENT


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    classify: Callable[[BaseException], ErrorClass] = classify_error,
    policy: RetryPolicy | None = None,
    sleep: Sleep = asyncio.sleep,
    label: str = "operation",
) -> T:
    """Run operation() with bounded retries. Cancellation is never retried."""
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    policy = policy or RetryPolicy()
    transient_failures = 0
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:  # noqa: BLE001
            kind = classify(e)
            if kind == ErrorClass.FATAL:
                logger.warning("%s failed with fatal error: %s", label, e)
                raise
            if attempt == max_attempts:
                logger.warning("%s failed after %d attempts: %s", label, attempt, e)
                raise
            if kind == ErrorClass.RATE_LIMITED:
                delay = policy.rate_limit_cooldown_s
            else:
                delay = policy.transient_delay(transient_failures)
                transient_failures += 1
            logger.info(
                "%s attempt %d/%d failed (%s); retrying in %.1fs",
                label, attempt, max_attempts, kind.value, delay,
            )
            await sleep(delay)
    raise AssertionError("unreachable")


async def pace(delay_s: float, sleep: Sleep = asyncio.sleep) -> None:
    """Fixed pause between sequential calls to stay under provider throughput quotas."""
    if delay_s > 0:
        await sleep(delay_s)
