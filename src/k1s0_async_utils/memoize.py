"""非同期関数のメモ化"""

from __future__ import annotations

import asyncio
import functools
import json
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def cache_key(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """引数を決定的にシリアライズしてキャッシュキーにする。"""
    return json.dumps([list(args), sorted(kwargs.items())], default=repr)


class AsyncMemoizer(Generic[T]):
    """引数ごとに operation の結果をキャッシュするラッパー。

    実行中のタスクもキャッシュするため、同じ引数の同時呼び出しは
    operation を 1 回しか実行しない。失敗も含めてエントリは破棄されない。
    """

    def __init__(self, operation: Callable[..., Awaitable[T]]) -> None:
        self._operation = operation
        self._cache: dict[str, asyncio.Future[T]] = {}
        functools.update_wrapper(self, operation)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def __call__(self, *args: Any, **kwargs: Any) -> T:
        key = cache_key(args, kwargs)
        task = self._cache.get(key)
        if task is None:
            task = asyncio.ensure_future(self._operation(*args, **kwargs))
            self._cache[key] = task
        return await asyncio.shield(task)


def memoize_async(operation: Callable[..., Awaitable[T]]) -> AsyncMemoizer[T]:
    """operation をメモ化したラッパーを返す。"""
    return AsyncMemoizer(operation)
