"""Middleware de contexto: request id, tempo de resposta e log de acesso.

Mais externo dos middlewares da app (abaixo só do CORS). Qualquer
exceção que escape das camadas internas vira INTERNAL_ERROR aqui.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from api.errors.handlers import REQUEST_ID_HEADER, client_ip, unhandled_exception_handler
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.logging import log_http_request
from config.settings import get_base_settings

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)

RESPONSE_TIME_HEADER = "X-Response-Time"
API_VERSION_HEADER = "X-API-Version"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Define o request id no contexto e o devolve em X-Request-ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = set_correlation_id(request.headers.get(REQUEST_ID_HEADER))
        request_id = get_correlation_id()
        request.state.request_id = request_id
        started_at = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = await unhandled_exception_handler(request, exc)

            duration_ms = (time.perf_counter() - started_at) * 1000
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[RESPONSE_TIME_HEADER] = f"{duration_ms:.2f}ms"
            response.headers[API_VERSION_HEADER] = get_base_settings().api_version
            log_http_request(
                logger,
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
                client_ip=client_ip(request),
                user_agent=request.headers.get("user-agent"),
            )
            return response
        finally:
            reset_correlation_id(token)
