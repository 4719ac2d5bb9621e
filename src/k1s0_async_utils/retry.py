"""リトライ実行エンジン"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .exceptions import RetryLimitExceededError
from .models import BackoffPolicy, RetryPolicy, build_policy

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def retry(operation: Callable[[], Awaitable[T]], max_attempts: int) -> T:
    """失敗時に待機なしで再実行する。

    全試行が失敗した場合は最後の例外をそのまま送出する。
    max_attempts が 0 の場合は operation を呼ばずに RetryLimitExceededError。
    """
    policy = build_policy(RetryPolicy, max_attempts=max_attempts)
    last_error: Exception | None = None
    for attempt in range(policy.max_attempts):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            logger.debug(
                "Retry attempt failed",
                extra={"attempt": attempt + 1, "error": str(e)},
            )
    if last_error is None:
        raise RetryLimitExceededError(attempts=0)
    raise last_error


async def retry_with_delay(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    delay: float,
) -> T:
    """試行の間に delay 秒待機しながら再実行する。"""
    policy = build_policy(RetryPolicy, max_attempts=max_attempts, delay=delay)
    return await _run(operation, policy.max_attempts, lambda _: policy.delay)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    base_delay: float,
    max_delay: float,
) -> T:
    """待機時間を失敗ごとに倍にしながら再実行する。

    k 回目の失敗後の待機は min(base_delay * 2**(k-1), max_delay) 秒。
    """
    policy = build_policy(
        BackoffPolicy,
        max_attempts=max_attempts,
        base_delay=base_delay,
        max_delay=max_delay,
    )
    return await retry_with_policy(policy, operation)


async def retry_with_policy(policy: BackoffPolicy, operation: Callable[[], Awaitable[T]]) -> T:
    """BackoffPolicy に従ってリトライ付きで実行する。

    multiplier や jitter を変えたい場合はこちらを使う。
    """
    return await _run(operation, policy.max_attempts, policy.compute_delay)


async def sequential_retry(
    operation: Callable[[], Awaitable[T]],
    retries: int,
    delay: float,
) -> T:
    """失敗のたびに delay 秒待機し、最後の失敗の後も待ってから諦める。"""
    policy = build_policy(RetryPolicy, max_attempts=retries, delay=delay)
    last_error: Exception | None = None
    for attempt in range(policy.max_attempts):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            logger.debug(
                "Retry attempt failed",
                extra={"attempt": attempt + 1, "error": str(e)},
            )
            await asyncio.sleep(policy.delay)
    logger.warning(
        "Retry limit exceeded",
        extra={"attempts": policy.max_attempts, "error": str(last_error)},
    )
    raise RetryLimitExceededError(attempts=policy.max_attempts, last_error=last_error)


async def _run(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    compute_delay: Callable[[int], float],
) -> T:
    last_error: Exception | None = None
    for attempt in range(max_attempts):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            logger.debug(
                "Retry attempt failed",
                extra={"attempt": attempt + 1, "error": str(e)},
            )
            if attempt + 1 < max_attempts:
                await asyncio.sleep(compute_delay(attempt))
    logger.warning(
        "Retry limit exceeded",
        extra={"attempts": max_attempts, "error": str(last_error)},
    )
    raise RetryLimitExceededError(attempts=max_attempts, last_error=last_error)
