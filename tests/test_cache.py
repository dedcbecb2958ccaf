import asyncio

import pytest

from core.cache import AsyncCache, CacheState


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_load():
    calls = []
    release = asyncio.Event()

    async def loader():
        calls.append(1)
        await release.wait()
        return ["chunk"]

    cache = AsyncCache(loader)
    assert cache.state is CacheState.EMPTY
    first = asyncio.ensure_future(cache.get())
    second = asyncio.ensure_future(cache.get())
    await asyncio.sleep(0)
    assert cache.state is CacheState.LOADING
    release.set()
    assert await asyncio.gather(first, second) == [["chunk"], ["chunk"]]
    assert cache.state is CacheState.READY
    assert await cache.get() == ["chunk"]
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_failed_load_is_retried():
    attempts = []

    async def loader():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("extraction failed")
        return "corpus"

    cache = AsyncCache(loader)
    with pytest.raises(RuntimeError):
        await cache.get()
    assert cache.state is CacheState.EMPTY
    assert await cache.get() == "corpus"
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_clear_forces_a_rebuild():
    attempts = []

    async def loader():
        attempts.append(1)
        return len(attempts)

    cache = AsyncCache(loader)
    assert await cache.get() == 1
    cache.clear()
    assert cache.state is CacheState.EMPTY
    assert await cache.get() == 2
