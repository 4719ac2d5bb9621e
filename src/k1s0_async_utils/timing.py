"""タイムアウト・デバウンス・スロットル"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from .exceptions import InvalidArgumentError, OperationTimeoutError

T = TypeVar("T")

logger = logging.getLogger(__name__)

# タイムアウトで見捨てたタスクへの参照。完了時に破棄する。
_abandoned: set[asyncio.Future[Any]] = set()


async def timeout(operation: Callable[[], Awaitable[T]], duration: float) -> T:
    """operation を duration 秒以内に完了させる。

    タイマーが先に発火した場合は OperationTimeoutError を送出する。
    operation はキャンセルされずに走り続け、その結果は捨てられる。
    """
    if duration < 0:
        raise InvalidArgumentError(f"duration must be >= 0, got {duration}")
    task = asyncio.ensure_future(operation())
    done, _ = await asyncio.wait({task}, timeout=duration)
    if task in done:
        return task.result()
    logger.warning("Operation timed out", extra={"timeout": duration})
    _abandoned.add(task)
    task.add_done_callback(_discard)
    raise OperationTimeoutError(duration)


def _discard(task: asyncio.Future[Any]) -> None:
    _abandoned.discard(task)
    if not task.cancelled():
        task.exception()


def _transfer(source: asyncio.Future[T], targets: list[asyncio.Future[T]]) -> None:
    """source の結果を targets すべてに伝播する。"""
    cancelled = source.cancelled()
    error = None if cancelled else source.exception()
    for target in targets:
        if target.done():
            continue
        if cancelled:
            target.cancel()
        elif error is not None:
            target.set_exception(error)
        else:
            target.set_result(source.result())


class Debouncer(Generic[T]):
    """最後の呼び出しから delay 秒経過した時点で 1 度だけ operation を実行する。"""

    def __init__(self, operation: Callable[..., Awaitable[T]], delay: float) -> None:
        if delay < 0:
            raise InvalidArgumentError(f"delay must be >= 0, got {delay}")
        self._operation = operation
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._waiters: list[asyncio.Future[T]] = []
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}

    @property
    def pending(self) -> bool:
        """タイマーが待機中か。"""
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> asyncio.Future[T]:
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._args = args
        self._kwargs = kwargs
        waiter: asyncio.Future[T] = loop.create_future()
        self._waiters.append(waiter)
        self._handle = loop.call_later(self._delay, self._fire)
        return waiter

    def _fire(self) -> None:
        self._handle = None
        waiters, self._waiters = self._waiters, []
        task = asyncio.ensure_future(self._operation(*self._args, **self._kwargs))
        task.add_done_callback(lambda t: _transfer(t, waiters))


class Throttler(Generic[T]):
    """interval 秒あたり最大 1 回だけ operation を実行する。

    interval 内に届いた呼び出しは境界時刻の 1 回の実行にまとめられ、
    最後に届いた引数が使われる。
    """

    def __init__(self, operation: Callable[..., Awaitable[T]], interval: float) -> None:
        if interval < 0:
            raise InvalidArgumentError(f"interval must be >= 0, got {interval}")
        self._operation = operation
        self._interval = interval
        self._last_call: float | None = None
        self._handle: asyncio.TimerHandle | None = None
        self._pending: asyncio.Future[T] | None = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}

    def __call__(self, *args: Any, **kwargs: Any) -> asyncio.Future[T]:
        loop = asyncio.get_running_loop()
        if self._pending is not None:
            self._args = args
            self._kwargs = kwargs
            return self._pending

        now = loop.time()
        if self._last_call is None or now - self._last_call >= self._interval:
            self._last_call = now
            return asyncio.ensure_future(self._operation(*args, **kwargs))

        self._args = args
        self._kwargs = kwargs
        self._pending = loop.create_future()
        wait = self._interval - (now - self._last_call)
        self._handle = loop.call_later(wait, self._fire)
        return self._pending

    def _fire(self) -> None:
        pending = self._pending
        self._pending = None
        self._handle = None
        self._last_call = asyncio.get_running_loop().time()
        task = asyncio.ensure_future(self._operation(*self._args, **self._kwargs))
        if pending is not None:
            task.add_done_callback(lambda t: _transfer(t, [pending]))


def debounce_async(operation: Callable[..., Awaitable[T]], delay: float) -> Debouncer[T]:
    """operation をデバウンスしたラッパーを返す。"""
    return Debouncer(operation, delay)


def throttle_async(operation: Callable[..., Awaitable[T]], interval: float) -> Throttler[T]:
    """operation をスロットルしたラッパーを返す。"""
    return Throttler(operation, interval)
