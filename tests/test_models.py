"""ポリシー設定と例外型のユニットテスト"""

import pytest
from k1s0_async_utils import (
    AsyncUtilsError,
    AsyncUtilsErrorCodes,
    BackoffPolicy,
    CircuitBreakerConfig,
    InvalidArgumentError,
    RetryLimitExceededError,
    RetryPolicy,
)
from k1s0_async_utils.models import build_policy
from pydantic import ValidationError


def test_default_policies() -> None:
    """デフォルト設定の確認。"""
    assert RetryPolicy().max_attempts == 3
    backoff = BackoffPolicy()
    assert backoff.multiplier == 2.0
    assert backoff.jitter is False
    assert CircuitBreakerConfig().max_failures == 5


def test_compute_delay_doubles_and_caps() -> None:
    """遅延が倍々に増え max_delay で頭打ちになること。"""
    policy = BackoffPolicy(base_delay=0.1, max_delay=0.5)
    assert [policy.compute_delay(k) for k in range(5)] == pytest.approx(
        [0.1, 0.2, 0.4, 0.5, 0.5]
    )


def test_compute_delay_with_jitter() -> None:
    """ジッター付きの遅延が許容範囲内であること。"""
    policy = BackoffPolicy(base_delay=1.0, max_delay=30.0, multiplier=1.0, jitter=True)
    for _ in range(50):
        assert 0.9 <= policy.compute_delay(0) <= 1.1


def test_build_policy_validation_error() -> None:
    """不正な値は InvalidArgumentError になること。"""
    with pytest.raises(InvalidArgumentError) as exc_info:
        build_policy(RetryPolicy, max_attempts=-1)
    assert exc_info.value.code == AsyncUtilsErrorCodes.INVALID_ARGUMENT
    assert exc_info.value.__cause__ is not None
    assert isinstance(exc_info.value, ValueError)


def test_policies_are_frozen() -> None:
    policy = RetryPolicy()
    with pytest.raises(ValidationError):
        policy.max_attempts = 5  # type: ignore[misc]


def test_error_str_includes_code() -> None:
    """エラー文字列にコードが含まれること。"""
    err = AsyncUtilsError(code="SOME_CODE", message="something failed")
    assert str(err) == "SOME_CODE: something failed"


def test_retry_limit_error_chains_cause() -> None:
    cause = RuntimeError("boom")
    err = RetryLimitExceededError(attempts=3, last_error=cause)
    assert str(err) == "RETRY_LIMIT_EXCEEDED: Retry limit exceeded"
    assert err.__cause__ is cause
    assert err.attempts == 3
