"""Bounded-concurrency fan-out shared by the aggregation services."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_CONCURRENCY = 10


async def gather_bounded(
    func: Callable[[T], Awaitable[R]],
    args: Iterable[T],
    *,
    limit: int = DEFAULT_CONCURRENCY,
) -> list[R]:
    """Apply *func* to every argument with at most *limit* calls in flight.

    Results come back in argument order.  The first failure propagates.
    """
    sem = asyncio.Semaphore(limit)

    async def _run_one(arg: T) -> R:
        async with sem:
            return await func(arg)

    return list(await asyncio.gather(*(_run_one(arg) for arg in args)))
