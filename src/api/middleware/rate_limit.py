"""Rate limiting por IP: limitador geral (middleware) e de provisionamento.

O limitador concreto (memória ou Redis) fica em app.state.rate_limiter,
definido em create_app. Falha do backend libera a requisição e loga.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from api.errors.handlers import client_ip, render_error
from config.logging import log_security_event
from config.settings import get_rate_limit_settings
from utils.errors import ErrorCode, RateLimitExceededError, RedisConnectionError

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from app.protocols.rate_limiter import RateLimitDecision, RateLimiterProtocol
    from config.settings import RateLimitSettings

logger = logging.getLogger(__name__)

EXEMPT_PATH_PREFIX = "/health"


def _format_window(seconds: int) -> str:
    if seconds % 60 == 0 and seconds >= 60:
        minutes = seconds // 60
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    return f"{seconds} seconds"


async def _hit(
    limiter: RateLimiterProtocol,
    key: str,
    limit: int,
    window_seconds: int,
) -> RateLimitDecision | None:
    try:
        return await limiter.hit(key, limit, window_seconds)
    except RedisConnectionError:
        logger.error("rate_limit_backend_unavailable", exc_info=True, extra={"limiter": key.split(":", 1)[0]})
        return None


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(decision.retry_after),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limitador geral: todas as rotas exceto /health*.

    Args:
        app: Próxima camada ASGI.
        settings: Limites e janela do limitador geral.
    """

    def __init__(self, app: ASGIApp, settings: RateLimitSettings) -> None:
        super().__init__(app)
        self._settings = settings

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(EXEMPT_PATH_PREFIX):
            return await call_next(request)

        ip = client_ip(request)
        limiter: RateLimiterProtocol = request.app.state.rate_limiter
        decision = await _hit(
            limiter,
            f"general:{ip}",
            self._settings.max_requests,
            self._settings.window_seconds,
        )
        if decision is not None and not decision.allowed:
            log_security_event(
                "rate_limit_exceeded",
                client_ip=ip,
                path=request.url.path,
                method=request.method,
                limit=decision.limit,
                window_seconds=self._settings.window_seconds,
            )
            error = RateLimitExceededError(
                "Too many requests",
                ErrorCode.RATE_LIMIT_EXCEEDED,
                f"Maximum {decision.limit} requests per {_format_window(self._settings.window_seconds)}",
                decision.retry_after,
            )
            response = render_error(request, error)
            response.headers.update(_rate_limit_headers(decision))
            return response

        response = await call_next(request)
        if decision is not None:
            response.headers.update(_rate_limit_headers(decision))
        return response


async def enforce_provisioning_rate_limit(request: Request) -> None:
    """Dependência das rotas POST de provisionamento.

    Roda antes da validação do body: requisições inválidas também contam.

    Raises:
        RateLimitExceededError: PROVISIONING_RATE_LIMIT_EXCEEDED com retryAfter.
    """
    settings = get_rate_limit_settings()
    ip = client_ip(request)
    limiter: RateLimiterProtocol = request.app.state.rate_limiter
    decision = await _hit(
        limiter,
        f"provisioning:{ip}",
        settings.provisioning_max_requests,
        settings.provisioning_window_seconds,
    )
    if decision is None or decision.allowed:
        return

    log_security_event(
        "provisioning_rate_limit_exceeded",
        client_ip=ip,
        path=request.url.path,
        method=request.method,
        limit=decision.limit,
        window_seconds=settings.provisioning_window_seconds,
    )
    raise RateLimitExceededError(
        "Too many provisioning requests",
        ErrorCode.PROVISIONING_RATE_LIMIT_EXCEEDED,
        f"Maximum {decision.limit} provisioning requests per "
        f"{_format_window(settings.provisioning_window_seconds)}",
        decision.retry_after,
    )
