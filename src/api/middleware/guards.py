"""Guardas de entrada: content type, tamanho e screening de segurança.

Executadas nesta ordem, antes do rate limit e de qualquer parsing.
O body lido aqui fica em request.state.raw_body para o log de erros.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from api.errors.handlers import client_ip, render_error
from api.validators.security import find_suspicious_pattern
from config.logging import log_security_event
from utils.errors import RequestTooLargeError, SecurityViolationError, UnsupportedMediaTypeError

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
JSON_CONTENT_TYPE = "application/json"


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


async def _read_body(request: Request, max_bytes: int) -> bytes | None:
    """Lê o body em chunks; None assim que passar de max_bytes."""
    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            return None
        chunks.append(chunk)
    body = b"".join(chunks)
    # Starlette repassa _body às camadas seguintes no lugar do stream consumido
    request._body = body
    return body


class RequestGuardMiddleware(BaseHTTPMiddleware):
    """Rejeita requisições malformadas ou suspeitas antes das rotas.

    Args:
        app: Próxima camada ASGI.
        max_body_bytes: Limite de tamanho do body (Content-Length e lido).
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        super().__init__(app)
        self._max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        ip = client_ip(request)
        path = request.url.path

        if request.method in BODY_METHODS:
            content_type = request.headers.get("content-type", "")
            if JSON_CONTENT_TYPE not in content_type.lower():
                return render_error(request, UnsupportedMediaTypeError())

        declared = _declared_length(request)
        if declared is not None and declared > self._max_body_bytes:
            log_security_event(
                "request_size_exceeded",
                client_ip=ip,
                path=path,
                content_length=declared,
                max_size=self._max_body_bytes,
            )
            return render_error(request, RequestTooLargeError(self._max_body_bytes))

        body = await _read_body(request, self._max_body_bytes)
        if body is None:
            log_security_event(
                "request_size_exceeded",
                client_ip=ip,
                path=path,
                content_length=None,
                max_size=self._max_body_bytes,
            )
            return render_error(request, RequestTooLargeError(self._max_body_bytes))
        request.state.raw_body = body

        url = path + (f"?{request.url.query}" if request.url.query else "")
        matched = find_suspicious_pattern(
            body.decode("utf-8", errors="replace"),
            url,
            request.headers.get("user-agent", ""),
        )
        if matched is not None:
            log_security_event(
                "suspicious_pattern_detected",
                client_ip=ip,
                path=path,
                method=request.method,
                pattern=matched,
                user_agent=request.headers.get("user-agent"),
            )
            return render_error(request, SecurityViolationError())

        return await call_next(request)
