"""memoize_async のユニットテスト"""

import asyncio

import pytest
from k1s0_async_utils import memoize_async
from k1s0_async_utils.memoize import cache_key


async def test_memoize_invokes_once_for_same_args() -> None:
    """同じ引数の 2 回目の呼び出しはキャッシュから返ること。"""
    count = 0

    async def double(x: int) -> int:
        nonlocal count
        count += 1
        return x * 2

    memoized = memoize_async(double)
    assert await memoized(2) == 4
    assert await memoized(2) == 4
    assert count == 1


async def test_memoize_distinct_args() -> None:
    """異なる引数は別々に実行されること。"""
    count = 0

    async def double(x: int) -> int:
        nonlocal count
        count += 1
        return x * 2

    memoized = memoize_async(double)
    assert await memoized(1) == 2
    assert await memoized(3) == 6
    assert count == 2
    assert memoized.cache_size == 2


async def test_memoize_shares_in_flight_call() -> None:
    """実行中の同時呼び出しは 1 回の実行を共有すること。"""
    count = 0

    async def slow(x: int) -> int:
        nonlocal count
        count += 1
        await asyncio.sleep(0.02)
        return x

    memoized = memoize_async(slow)
    results = await asyncio.gather(memoized(5), memoized(5), memoized(5))
    assert results == [5, 5, 5]
    assert count == 1


async def test_memoize_caches_failures() -> None:
    """失敗した結果もキャッシュされること。"""
    count = 0

    async def boom() -> None:
        nonlocal count
        count += 1
        raise ValueError("boom")

    memoized = memoize_async(boom)
    for _ in range(2):
        with pytest.raises(ValueError):
            await memoized()
    assert count == 1


async def test_memoize_keyword_arguments() -> None:
    """キーワード引数の順序に依存しないこと。"""
    count = 0

    async def op(a: int, b: int) -> int:
        nonlocal count
        count += 1
        return a + b

    memoized = memoize_async(op)
    assert await memoized(a=1, b=2) == 3
    assert await memoized(b=2, a=1) == 3
    assert count == 1


def test_cache_key_is_deterministic() -> None:
    assert cache_key((1, "a"), {"y": 2, "x": 1}) == cache_key((1, "a"), {"x": 1, "y": 2})
    assert cache_key((1,), {}) != cache_key(("1",), {})


def test_memoize_keeps_wrapped_name() -> None:
    async def fetch_user() -> None: ...

    assert memoize_async(fetch_user).__name__ == "fetch_user"


async def test_memoize_dict_argument_with_mixed_key_types() -> None:
    """キーの型が混在した dict 引数でも失敗せずキャッシュされること。"""
    count = 0

    async def op(mapping: dict) -> int:
        nonlocal count
        count += 1
        return len(mapping)

    memoized = memoize_async(op)
    assert await memoized({1: "a", "b": 2}) == 2
    assert await memoized({1: "a", "b": 2}) == 2
    assert count == 1
