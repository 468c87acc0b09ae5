"""Testes do MemoryRateLimitStore com relógio injetado."""

from __future__ import annotations

import pytest

from app.infra.stores import MemoryRateLimitStore


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryRateLimitStore:
    return MemoryRateLimitStore(clock=clock)


class TestHit:
    @pytest.mark.asyncio
    async def test_allows_up_to_limit(self, store: MemoryRateLimitStore) -> None:
        decisions = [await store.hit("general:1.2.3.4", 3, 60) for _ in range(3)]

        assert all(decision.allowed for decision in decisions)
        assert [decision.remaining for decision in decisions] == [2, 1, 0]

    @pytest.mark.asyncio
    async def test_blocks_after_limit_with_retry_after(
        self, store: MemoryRateLimitStore, clock: FakeClock
    ) -> None:
        for _ in range(3):
            await store.hit("general:1.2.3.4", 3, 60)
        clock.advance(20.5)

        decision = await store.hit("general:1.2.3.4", 3, 60)

        assert decision.allowed is False
        assert decision.count == 4
        assert decision.retry_after == 40
        assert 1 <= decision.retry_after <= 60

    @pytest.mark.asyncio
    async def test_window_resets_after_expiry(
        self, store: MemoryRateLimitStore, clock: FakeClock
    ) -> None:
        for _ in range(4):
            await store.hit("general:1.2.3.4", 3, 60)
        clock.advance(60)

        decision = await store.hit("general:1.2.3.4", 3, 60)

        assert decision.allowed is True
        assert decision.count == 1

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, store: MemoryRateLimitStore) -> None:
        for _ in range(2):
            await store.hit("general:1.1.1.1", 1, 60)

        decision = await store.hit("general:2.2.2.2", 1, 60)
        provisioning = await store.hit("provisioning:1.1.1.1", 1, 900)

        assert decision.allowed is True
        assert provisioning.allowed is True

    @pytest.mark.asyncio
    async def test_retry_after_is_at_least_one(
        self, store: MemoryRateLimitStore, clock: FakeClock
    ) -> None:
        for _ in range(2):
            await store.hit("k", 1, 60)
        clock.advance(59.99)

        decision = await store.hit("k", 1, 60)

        assert decision.retry_after == 1


class TestSweep:
    @pytest.mark.asyncio
    async def test_removes_only_expired(self, store: MemoryRateLimitStore, clock: FakeClock) -> None:
        await store.hit("short", 10, 10)
        await store.hit("long", 10, 100)
        clock.advance(50)

        removed = await store.sweep()

        assert removed == 1
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_close_is_noop(self, store: MemoryRateLimitStore) -> None:
        await store.close()
        await store.ping()
