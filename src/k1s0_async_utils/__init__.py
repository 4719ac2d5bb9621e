"""k1s0 async utils library."""

from .breaker import CircuitBreaker, CircuitState, circuit_breaker
from .combinators import all_settled, batch, parallel, race, sequence
from .exceptions import (
    AsyncUtilsError,
    AsyncUtilsErrorCodes,
    CircuitOpenError,
    InvalidArgumentError,
    OperationTimeoutError,
    RetryLimitExceededError,
)
from .iteration import (
    every_async,
    filter_async,
    find_async,
    find_index_async,
    for_each_async,
    map_async,
    reduce_async,
    some_async,
)
from .memoize import AsyncMemoizer, memoize_async
from .models import (
    BackoffPolicy,
    CircuitBreakerConfig,
    RetryPolicy,
    SettledResult,
    SettledStatus,
)
from .retry import (
    retry,
    retry_with_backoff,
    retry_with_delay,
    retry_with_policy,
    sequential_retry,
)
from .timing import Debouncer, Throttler, debounce_async, throttle_async, timeout

__all__ = [
    "AsyncMemoizer",
    "AsyncUtilsError",
    "AsyncUtilsErrorCodes",
    "BackoffPolicy",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitOpenError",
    "CircuitState",
    "Debouncer",
    "InvalidArgumentError",
    "OperationTimeoutError",
    "RetryLimitExceededError",
    "RetryPolicy",
    "SettledResult",
    "SettledStatus",
    "Throttler",
    "all_settled",
    "batch",
    "circuit_breaker",
    "debounce_async",
    "every_async",
    "filter_async",
    "find_async",
    "find_index_async",
    "for_each_async",
    "map_async",
    "memoize_async",
    "parallel",
    "race",
    "reduce_async",
    "retry",
    "retry_with_backoff",
    "retry_with_delay",
    "retry_with_policy",
    "sequence",
    "sequential_retry",
    "some_async",
    "throttle_async",
    "timeout",
]
