"""完了コンビネータ（race / sequence / parallel / batch / all_settled）"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from .exceptions import InvalidArgumentError
from .models import SettledResult, SettledStatus

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]


async def race(operations: Sequence[Operation[T]]) -> T:
    """全 operation を同時に開始し、最初に確定した結果（成功・失敗）を返す。

    負けた operation はキャンセルされない。
    """
    if not operations:
        raise InvalidArgumentError("race requires at least one operation")
    tasks = [asyncio.ensure_future(op()) for op in operations]
    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    for task in pending:
        task.add_done_callback(_consume)
    first = next(task for task in tasks if task in done)
    for task in done:
        if task is not first:
            _consume(task)
    return first.result()


def _consume(task: asyncio.Future[Any]) -> None:
    if not task.cancelled():
        task.exception()


async def sequence(operations: Sequence[Operation[T]]) -> T | None:
    """operation を 1 つずつ順に実行し、最後の結果を返す。"""
    result: T | None = None
    for op in operations:
        result = await op()
    return result


async def parallel(operations: Sequence[Operation[T]]) -> list[T]:
    """全 operation を同時に実行し、入力順に結果を返す。

    いずれかが失敗した時点でその例外を送出する。
    """
    return list(await asyncio.gather(*(op() for op in operations)))


async def batch(operations: Sequence[Operation[T]], batch_size: int) -> list[T]:
    """operation を batch_size ごとのグループに分けて実行し、入力順に結果を返す。

    グループは順番に待つのではなく全グループを同時に開始する。
    batch_size は同時実行数の上限ではない。
    """
    if batch_size < 1:
        raise InvalidArgumentError(f"batch_size must be >= 1, got {batch_size}")
    groups = [operations[i : i + batch_size] for i in range(0, len(operations), batch_size)]
    results = await asyncio.gather(*(parallel(group) for group in groups))
    return [value for group in results for value in group]


async def all_settled(awaitables: Sequence[Awaitable[Any]]) -> list[SettledResult]:
    """全 awaitable の確定を待ち、それぞれの結果を SettledResult で返す。失敗しない。"""
    outcomes = await asyncio.gather(*awaitables, return_exceptions=True)
    return [
        SettledResult(status=SettledStatus.REJECTED, reason=outcome)
        if isinstance(outcome, BaseException)
        else SettledResult(status=SettledStatus.FULFILLED, value=outcome)
        for outcome in outcomes
    ]
