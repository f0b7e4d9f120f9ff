"""Tests for KeyedLock."""

import asyncio

import pytest

from app.services.locks import KeyedLock

pytestmark = pytest.mark.asyncio


async def test_same_key_is_serialised() -> None:
    locks = KeyedLock()
    events: list[str] = []

    async def worker(name: str) -> None:
        async with locks.hold("listing-1"):
            events.append(f"{name}:start")
            await asyncio.sleep(0.01)
            events.append(f"{name}:end")

    await asyncio.gather(worker("a"), worker("b"))

    assert events in (
        ["a:start", "a:end", "b:start", "b:end"],
        ["b:start", "b:end", "a:start", "a:end"],
    )


async def test_different_keys_do_not_block() -> None:
    locks = KeyedLock()
    inside = asyncio.Event()
    release = asyncio.Event()

    async def holder() -> None:
        async with locks.hold("listing-1"):
            inside.set()
            await release.wait()

    task = asyncio.create_task(holder())
    await inside.wait()
    assert locks.locked("listing-1")

    async def acquire_other() -> bool:
        async with locks.hold("listing-2"):
            return locks.locked("listing-1")

    assert await asyncio.wait_for(acquire_other(), timeout=1)

    release.set()
    await task


async def test_entries_are_freed_after_use() -> None:
    locks = KeyedLock()
    async with locks.hold("listing-1"):
        assert len(locks) == 1
    assert len(locks) == 0
    assert not locks.locked("listing-1")


async def test_entry_freed_when_body_raises() -> None:
    locks = KeyedLock()
    with pytest.raises(RuntimeError):
        async with locks.hold("listing-1"):
            raise RuntimeError("boom")
    assert len(locks) == 0
