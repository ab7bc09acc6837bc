"""Shared fixtures: an in-memory store and a store whose writes are gated."""

from __future__ import annotations

import asyncio

import pytest

from prefcell import MemoryValueStore


class GatedStore(MemoryValueStore):
    """MemoryValueStore whose writes block until the test releases them.

    Each write gets its own asyncio.Event, appended to `gates` in call
    order. Setting fail_next makes the next write raise that error.
    """

    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.gates: list[asyncio.Event] = []
        self.fail_next: Exception | None = None

    async def _write(self, method, kind, key, value) -> None:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        if self.fail_next is not None:
            err, self.fail_next = self.fail_next, None
            raise err
        await super()._write(method, kind, key, value)

    async def wait_for_writes(self, count: int) -> None:
        """Yield to the loop until `count` writes are parked on their gates."""
        for _ in range(100):
            if len(self.gates) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} pending writes, saw {len(self.gates)}")


class BrokenStore(MemoryValueStore):
    """Every write fails with OSError."""

    async def _write(self, method, kind, key, value) -> None:
        raise OSError("disk full")


@pytest.fixture
def store() -> MemoryValueStore:
    return MemoryValueStore()


@pytest.fixture
def gated_store() -> GatedStore:
    return GatedStore()


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()
