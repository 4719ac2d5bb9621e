"""Circuit breaker wrapper for async operations."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Generic, TypeVar

from .exceptions import CircuitOpenError
from .models import CircuitBreakerConfig, build_policy

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CircuitState(str, Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"


class CircuitBreaker(Generic[T]):
    """Stops forwarding calls for a cooldown period after consecutive failures.

    The reset is time based: once the cooldown has elapsed the breaker is
    closed with a zeroed failure count, whether or not calls were made.
    """

    def __init__(
        self,
        operation: Callable[..., Awaitable[T]],
        config: CircuitBreakerConfig | None = None,
    ) -> None:
        self._operation = operation
        self._config = config or CircuitBreakerConfig()
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at: float | None = None

    @property
    def state(self) -> CircuitState:
        """Current circuit state (may transition from OPEN to CLOSED)."""
        if self._state == CircuitState.OPEN and self._remaining() <= 0:
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._opened_at = None
            logger.info("Circuit breaker reset after cooldown")
        return self._state

    @property
    def failure_count(self) -> int:
        _ = self.state
        return self._failure_count

    def record_success(self) -> None:
        """Record a successful call."""
        self._failure_count = 0

    def record_failure(self) -> None:
        """Record a failed call.

        Failures of calls that were already in flight when the breaker
        opened are ignored, so the cooldown keeps running from the opening.
        """
        if self.state == CircuitState.OPEN:
            return
        self._failure_count += 1
        if self._failure_count >= self._config.max_failures:
            self._state = CircuitState.OPEN
            self._opened_at = time.monotonic()
            logger.warning(
                "Circuit breaker opened",
                extra={
                    "failures": self._failure_count,
                    "cooldown": self._config.cooldown,
                },
            )

    async def __call__(self, *args: Any, **kwargs: Any) -> T:
        """Execute the operation through the circuit breaker."""
        if self.state == CircuitState.OPEN:
            raise CircuitOpenError(self._remaining())
        try:
            result = await self._operation(*args, **kwargs)
        except Exception:
            self.record_failure()
            raise
        self.record_success()
        return result

    def _remaining(self) -> float:
        if self._opened_at is None:
            return 0.0
        return self._config.cooldown - (time.monotonic() - self._opened_at)


def circuit_breaker(
    operation: Callable[..., Awaitable[T]],
    max_failures: int,
    cooldown: float,
) -> CircuitBreaker[T]:
    """Wrap operation with a circuit breaker."""
    config = build_policy(CircuitBreakerConfig, max_failures=max_failures, cooldown=cooldown)
    return CircuitBreaker(operation, config)
