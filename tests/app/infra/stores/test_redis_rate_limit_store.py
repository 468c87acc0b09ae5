"""Testes do RedisRateLimitStore com cliente mockado."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.stores import RedisRateLimitStore
from utils.errors import RedisConnectionError


def _redis(results: list[object] | Exception) -> MagicMock:
    pipeline = MagicMock()
    if isinstance(results, Exception):
        pipeline.execute = AsyncMock(side_effect=results)
    else:
        pipeline.execute = AsyncMock(return_value=results)
    client = MagicMock()
    client.pipeline.return_value = pipeline
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_hit_uses_incr_expire_nx_ttl() -> None:
    client = _redis([1, True, 60])
    store = RedisRateLimitStore(client, clock=lambda: 500.0)

    decision = await store.hit("general:1.2.3.4", 60, 60)

    pipeline = client.pipeline.return_value
    pipeline.incr.assert_called_once_with("ratelimit:general:1.2.3.4")
    pipeline.expire.assert_called_once_with("ratelimit:general:1.2.3.4", 60, nx=True)
    pipeline.ttl.assert_called_once_with("ratelimit:general:1.2.3.4")
    assert decision.allowed is True
    assert decision.reset_at == 560.0


@pytest.mark.asyncio
async def test_hit_over_limit() -> None:
    store = RedisRateLimitStore(_redis([11, False, 300]), clock=lambda: 0.0)

    decision = await store.hit("provisioning:1.2.3.4", 10, 900)

    assert decision.allowed is False
    assert decision.retry_after == 300


@pytest.mark.asyncio
async def test_missing_ttl_falls_back_to_window() -> None:
    store = RedisRateLimitStore(_redis([1, True, -1]), clock=lambda: 0.0)

    decision = await store.hit("general:ip", 5, 60)

    assert decision.retry_after == 60


@pytest.mark.asyncio
async def test_backend_error_raises_redis_connection_error() -> None:
    store = RedisRateLimitStore(_redis(ConnectionError("down")))

    with pytest.raises(RedisConnectionError):
        await store.hit("general:ip", 5, 60)


@pytest.mark.asyncio
async def test_ping_and_close_delegate() -> None:
    client = _redis([1, True, 60])
    store = RedisRateLimitStore(client)

    await store.ping()
    await store.close()

    client.ping.assert_awaited_once()
    client.aclose.assert_awaited_once()
