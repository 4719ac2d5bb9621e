"""ポリシー設定と結果型（pydantic BaseModel / dataclass）"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidArgumentError

M = TypeVar("M", bound=BaseModel)


class RetryPolicy(BaseModel):
    """固定間隔リトライ設定。"""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=0)
    delay: float = Field(default=0.0, ge=0.0)


class BackoffPolicy(BaseModel):
    """指数バックオフ付きリトライ設定。"""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=0)
    base_delay: float = Field(default=0.1, ge=0.0)
    max_delay: float = Field(default=30.0, ge=0.0)
    multiplier: float = Field(default=2.0, ge=1.0)
    jitter: bool = False

    def compute_delay(self, attempt: int) -> float:
        """attempt 回目（0 始まり）の失敗後の待機秒数を計算する。"""
        capped = min(self.base_delay * (self.multiplier**attempt), self.max_delay)
        if self.jitter:
            return capped * (0.9 + random.random() * 0.2)
        return capped


class CircuitBreakerConfig(BaseModel):
    """サーキットブレーカー設定。"""

    model_config = ConfigDict(frozen=True)

    max_failures: int = Field(default=5, ge=1)
    cooldown: float = Field(default=30.0, ge=0.0)


def build_policy(model: type[M], **values: Any) -> M:
    """値を検証してポリシーを生成する。

    Raises:
        InvalidArgumentError: 検証に失敗した場合
    """
    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise InvalidArgumentError(
            message=f"Invalid {model.__name__}: {e}",
            cause=e,
        ) from e


class SettledStatus(str, Enum):
    """all_settled の結果ステータス。"""

    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SettledResult:
    """1 つの awaitable の確定結果。"""

    status: SettledStatus
    value: Any = None
    reason: BaseException | None = None

    @property
    def fulfilled(self) -> bool:
        return self.status == SettledStatus.FULFILLED

    def to_dict(self) -> dict[str, Any]:
        if self.fulfilled:
            return {"status": self.status.value, "value": self.value}
        return {"status": self.status.value, "reason": self.reason}
