"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.health.router import (
    detailed_health_check,
    health_check,
    liveness_check,
    readiness_check,
)
from app.infra.stores import MemoryRateLimitStore, RedisRateLimitStore


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/health/ready",
        "raw_path": b"/health/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


def _redis_limiter(ping: AsyncMock) -> RedisRateLimitStore:
    redis_client = MagicMock()
    redis_client.ping = ping
    return RedisRateLimitStore(redis_client)


@pytest.mark.asyncio
async def test_health_reports_service_and_version() -> None:
    response = await health_check()

    assert response.status == "healthy"
    assert response.service == "chat-session-provisioner"
    assert response.timestamp.endswith("Z")


@pytest.mark.asyncio
async def test_liveness() -> None:
    payload = await liveness_check()

    assert payload["status"] == "alive"
    assert payload["uptimeSeconds"] >= 0


@pytest.mark.asyncio
async def test_readiness_not_ready_without_rate_limiter() -> None:
    request = _build_request_with_state(SimpleNamespace(rate_limiter=None))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["rate_limiter"]["error"] == "not_configured"


@pytest.mark.asyncio
async def test_readiness_ready_with_memory_limiter() -> None:
    request = _build_request_with_state(SimpleNamespace(rate_limiter=MemoryRateLimitStore()))

    response = await readiness_check(request)

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_readiness_pings_redis() -> None:
    ping = AsyncMock(return_value=True)
    request = _build_request_with_state(SimpleNamespace(rate_limiter=_redis_limiter(ping)))

    response = await readiness_check(request)

    assert response.status_code == 200
    ping.assert_awaited_once()


@pytest.mark.asyncio
async def test_readiness_fails_when_redis_down() -> None:
    ping = AsyncMock(side_effect=ConnectionError("down"))
    request = _build_request_with_state(SimpleNamespace(rate_limiter=_redis_limiter(ping)))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["rate_limiter"]["error"] == "ConnectionError"


@pytest.mark.asyncio
async def test_detailed_health_has_no_secrets() -> None:
    request = _build_request_with_state(SimpleNamespace(rate_limiter=MemoryRateLimitStore()))

    payload = await detailed_health_check(request)

    assert payload["status"] == "healthy"
    assert payload["environment"] == "test"
    assert payload["rateLimit"]["provisioningMaxRequests"] == 10
    assert "secret_test_token" not in json.dumps(payload)
