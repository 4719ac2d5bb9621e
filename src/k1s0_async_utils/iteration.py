"""逐次実行の非同期コレクション操作

いずれも要素を 1 つずつ順に処理し、前の要素のコールバックが完了するまで
次の要素には進まない。
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")
A = TypeVar("A")

Predicate = Callable[[T], Awaitable[bool]]


async def map_async(items: Iterable[T], mapper: Callable[[T], Awaitable[R]]) -> list[R]:
    """各要素に mapper を適用した結果のリストを返す。"""
    result: list[R] = []
    for item in items:
        result.append(await mapper(item))
    return result


async def filter_async(items: Iterable[T], predicate: Predicate[T]) -> list[T]:
    """predicate が真となる要素のリストを返す。"""
    result: list[T] = []
    for item in items:
        if await predicate(item):
            result.append(item)
    return result


async def reduce_async(
    items: Iterable[T],
    reducer: Callable[[A, T], Awaitable[A]],
    initial: A,
) -> A:
    """reducer で要素を畳み込んだ値を返す。"""
    accumulator = initial
    for item in items:
        accumulator = await reducer(accumulator, item)
    return accumulator


async def some_async(items: Iterable[T], predicate: Predicate[T]) -> bool:
    for item in items:
        if await predicate(item):
            return True
    return False


async def every_async(items: Iterable[T], predicate: Predicate[T]) -> bool:
    for item in items:
        if not await predicate(item):
            return False
    return True


async def find_async(items: Iterable[T], predicate: Predicate[T]) -> T | None:
    """predicate が真となる最初の要素を返す。見つからなければ None。"""
    for item in items:
        if await predicate(item):
            return item
    return None


async def find_index_async(items: Iterable[T], predicate: Predicate[T]) -> int:
    """predicate が真となる最初の要素の位置を返す。見つからなければ -1。"""
    for index, item in enumerate(items):
        if await predicate(item):
            return index
    return -1


async def for_each_async(items: Iterable[T], callback: Callable[[T], Awaitable[object]]) -> None:
    for item in items:
        await callback(item)
