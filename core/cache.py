"""Process-wide memoisation of an async load (corpus build, document extraction).

The cache moves through three states: EMPTY, LOADING (one shared in-flight
task) and READY. Concurrent callers during LOADING await the same task. A
failed load puts the cache back to EMPTY so the next call retries.
"""

from __future__ import annotations
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"


class AsyncCache(Generic[T]):
    def __init__(self, loader: Callable[[], Awaitable[T]]) -> None:
        self._loader = loader
        self._state = CacheState.EMPTY
        self._value: Optional[T] = None
        self._task: Optional["asyncio.Task[T]"] = None

    @property
    def state(self) -> CacheState:
        return self._state

    async def _load(self) -> T:
        try:
            value = await self._loader()
        except Exception:
            logger.warning("Cached load failed; the next call will retry", exc_info=True)
            self._state = CacheState.EMPTY
            self._task = None
            raise
        self._value = value
        self._state = CacheState.READY
        self._task = None
        return value

    async def get(self) -> T:
        if self._state is CacheState.READY:
            return self._value  # type: ignore[return-value]
        if self._task is None:
            self._state = CacheState.LOADING
            self._task = asyncio.ensure_future(self._load())
        # shield: one cancelled waiter must not cancel the load for the others
        return await asyncio.shield(self._task)

    def clear(self) -> None:
        self._state = CacheState.EMPTY
        self._value = None
        self._task = None
