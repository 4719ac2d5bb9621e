"""async_utils ライブラリの例外型定義"""

from __future__ import annotations


class AsyncUtilsErrorCodes:
    """AsyncUtilsError のエラーコード定数。"""

    RETRY_LIMIT_EXCEEDED: str = "RETRY_LIMIT_EXCEEDED"
    TIMEOUT: str = "TIMEOUT"
    CIRCUIT_OPEN: str = "CIRCUIT_OPEN"
    INVALID_ARGUMENT: str = "INVALID_ARGUMENT"


class AsyncUtilsError(Exception):
    """async_utils ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class RetryLimitExceededError(AsyncUtilsError):
    """リトライ上限に達した場合のエラー。

    メッセージは汎用のまま。元の例外は last_error と __cause__ で参照できる。
    """

    def __init__(self, attempts: int, last_error: BaseException | None = None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            code=AsyncUtilsErrorCodes.RETRY_LIMIT_EXCEEDED,
            message="Retry limit exceeded",
            cause=last_error,
        )


class OperationTimeoutError(AsyncUtilsError, TimeoutError):
    """操作が制限時間内に完了しなかった場合のエラー。"""

    def __init__(self, after_seconds: float) -> None:
        self.after_seconds = after_seconds
        super().__init__(
            code=AsyncUtilsErrorCodes.TIMEOUT,
            message=f"Operation timed out after {after_seconds:.3f}s",
        )


class CircuitOpenError(AsyncUtilsError):
    """サーキットが OPEN 状態で呼び出しが拒否された場合のエラー。"""

    def __init__(self, remaining_seconds: float) -> None:
        self.remaining_seconds = remaining_seconds
        super().__init__(
            code=AsyncUtilsErrorCodes.CIRCUIT_OPEN,
            message=f"Circuit is open, remaining: {remaining_seconds:.3f}s",
        )


class InvalidArgumentError(AsyncUtilsError, ValueError):
    """引数や設定値が不正な場合のエラー。"""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(
            code=AsyncUtilsErrorCodes.INVALID_ARGUMENT,
            message=message,
            cause=cause,
        )
