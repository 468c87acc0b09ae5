"""Endpoints de health check (isentos do rate limit geral)."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.errors import utc_timestamp
from app.protocols.rate_limiter import RateLimiterProtocol
from config.settings import get_base_settings, get_rate_limit_settings

logger = logging.getLogger(__name__)

router = APIRouter()

_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


def _uptime_seconds() -> float:
    return round(time.monotonic() - _STARTED_AT, 1)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Verifica se o serviço está rodando."""
    settings = get_base_settings()
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        timestamp=utc_timestamp(),
        version=settings.api_version,
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, Any]:
    return {"status": "alive", "timestamp": utc_timestamp(), "uptimeSeconds": _uptime_seconds()}


@router.get("/health/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: backend do rate limiter precisa responder."""
    check = await _check_rate_limiter(getattr(request.app.state, "rate_limiter", None))
    ready = check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"rate_limiter": check.as_dict()},
        "timestamp": utc_timestamp(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


@router.get("/health/detailed")
async def detailed_health_check(request: Request) -> dict[str, Any]:
    """Diagnóstico sem segredos: ambiente, limites e estado das dependências."""
    base = get_base_settings()
    rate_limit = get_rate_limit_settings()
    check = await _check_rate_limiter(getattr(request.app.state, "rate_limiter", None))
    return {
        "status": "healthy" if check.status == "ok" else "degraded",
        "service": base.service_name,
        "version": base.api_version,
        "environment": base.environment,
        "uptimeSeconds": _uptime_seconds(),
        "rateLimit": {
            "backend": rate_limit.backend,
            "windowSeconds": rate_limit.window_seconds,
            "maxRequests": rate_limit.max_requests,
            "provisioningWindowSeconds": rate_limit.provisioning_window_seconds,
            "provisioningMaxRequests": rate_limit.provisioning_max_requests,
        },
        "checks": {"rate_limiter": check.as_dict()},
        "timestamp": utc_timestamp(),
    }


async def _check_rate_limiter(limiter: RateLimiterProtocol | None) -> DependencyCheck:
    if limiter is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(limiter.ping(), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        logger.warning("readiness_rate_limiter_check_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))
