"""Tradutor terminal de erros → ErrorEnvelope.

Único ponto que converte exceções em resposta HTTP e registra o erro.
Envelope: {error, code, details, timestamp, fields?, retryAfter?, stack?}.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.observability import get_correlation_id
from config.logging import redact_payload
from config.settings import get_base_settings
from utils.errors import ApiError, ErrorCode, ValidationFailedError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_HTTP_STATUS_CODES: dict[int, tuple[str, ErrorCode]] = {
    400: ("Bad request", ErrorCode.VALIDATION_ERROR),
    401: ("Authentication required", ErrorCode.UNAUTHORIZED),
    403: ("Access denied", ErrorCode.FORBIDDEN),
    405: ("Method not allowed", ErrorCode.ROUTE_NOT_FOUND),
    413: ("Request too large", ErrorCode.REQUEST_TOO_LARGE),
    415: ("Unsupported Media Type", ErrorCode.INVALID_CONTENT_TYPE),
    422: ("Unprocessable entity", ErrorCode.UNPROCESSABLE_ENTITY),
    429: ("Too many requests", ErrorCode.RATE_LIMIT_EXCEEDED),
}


def utc_timestamp() -> str:
    """Instante atual em ISO-8601 UTC com sufixo Z."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def client_ip(request: Request) -> str:
    """IP de origem; X-Forwarded-For só vale com TRUST_PROXY ativo."""
    if get_base_settings().trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"


def _logged_payload(request: Request) -> Any:
    raw = getattr(request.state, "raw_body", None)
    if not raw:
        return None
    try:
        return redact_payload(json.loads(raw))
    except (ValueError, UnicodeDecodeError):
        return "[unparseable body]"


def build_envelope(error: ApiError, exc: BaseException | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        "error": error.message,
        "code": error.code,
        "details": error.details,
        "timestamp": utc_timestamp(),
    }
    envelope.update(error.extra_fields())
    if exc is not None and not get_base_settings().is_production:
        envelope["stack"] = "".join(traceback.format_exception(exc))
    return envelope


def render_error(request: Request, error: ApiError, exc: BaseException | None = None) -> JSONResponse:
    """Loga o erro com contexto da requisição e devolve o envelope."""
    log_level = logging.ERROR if error.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        "request_failed",
        exc_info=exc if error.status_code >= 500 else None,
        extra={
            "endpoint": request.url.path,
            "method": request.method,
            "client_ip": client_ip(request),
            "user_agent": request.headers.get("user-agent"),
            "payload": _logged_payload(request),
            "status": error.status_code,
            "code": error.code,
        },
    )

    headers: dict[str, str] = {}
    request_id = getattr(request.state, "request_id", None) or get_correlation_id()
    if request_id:
        headers[REQUEST_ID_HEADER] = request_id
    retry_after = getattr(error, "retry_after", None)
    if retry_after is not None:
        headers["Retry-After"] = str(retry_after)

    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(build_envelope(error, exc)),
        headers=headers,
    )


def validation_fields(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Converte erros do pydantic em [{field, message, value}]."""
    fields: list[dict[str, Any]] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        value = None if error.get("type") == "missing" else error.get("input")
        fields.append(
            {
                "field": ".".join(location) or "body",
                "message": error.get("msg", "Invalid value"),
                "value": value,
            }
        )
    return fields


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return render_error(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return render_error(request, ValidationFailedError(validation_fields(exc)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        error = ApiError(
            "Route not found",
            404,
            ErrorCode.ROUTE_NOT_FOUND,
            f"The requested endpoint {request.method} {request.url.path} does not exist",
        )
    else:
        message, code = _HTTP_STATUS_CODES.get(
            exc.status_code, ("Internal server error", ErrorCode.INTERNAL_ERROR)
        )
        details = exc.detail if isinstance(exc.detail, str) else message
        error = ApiError(message, exc.status_code, code, details)
    return render_error(request, error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error = ApiError(
        "Internal server error",
        500,
        ErrorCode.INTERNAL_ERROR,
        "An unexpected error occurred",
    )
    return render_error(request, error, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
