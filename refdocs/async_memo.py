"""Single-flight memo table for values computed on the event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

T = TypeVar("T")


class AsyncMemo(Generic[T]):
    """Maps keys to tasks so each value is computed at most once.

    Concurrent callers asking for the same key await the same task; a
    failure is re-raised to every awaiter.
    """

    def __init__(self) -> None:
        self._tasks: dict[Hashable, asyncio.Task[T]] = {}

    def start(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> asyncio.Task[T]:
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._tasks[key] = task
        return task

    async def get(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        return await self.start(key, factory)

    def __contains__(self, key: object) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)
