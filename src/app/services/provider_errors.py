"""Conversão de ProviderFailure em ProviderError (HTTP).

Aplicado uma única vez, pelo serviço, quando a falha é terminal.
Passos best-effort nunca passam por aqui.
"""

from __future__ import annotations

from typing import NoReturn, TypeVar

from app.domain.result import Err, FailureKind, ProviderFailure, ProviderResult
from utils.errors import ErrorCode, ProviderError

T = TypeVar("T")

_KIND_TO_HTTP: dict[FailureKind, tuple[int, ErrorCode]] = {
    FailureKind.UNAUTHORIZED: (401, ErrorCode.UNAUTHORIZED),
    FailureKind.FORBIDDEN: (403, ErrorCode.FORBIDDEN),
    FailureKind.NOT_FOUND: (404, ErrorCode.NOT_FOUND),
    FailureKind.UNPROCESSABLE: (422, ErrorCode.UNPROCESSABLE_ENTITY),
    FailureKind.RATE_LIMITED: (429, ErrorCode.PROVIDER_RATE_LIMITED),
}

_PROVIDER_ERROR_CODES: dict[str, ErrorCode] = {
    "notion": ErrorCode.NOTION_ERROR,
    "airtable": ErrorCode.AIRTABLE_ERROR,
}


def to_provider_error(failure: ProviderFailure, message: str | None = None) -> ProviderError:
    """Mapeia a falha para status/código HTTP.

    Args:
        failure: Falha classificada pelo cliente.
        message: Resumo específico da operação (sobrescreve o do cliente).
    """
    status_code, code = _KIND_TO_HTTP.get(
        failure.kind,
        (400, _PROVIDER_ERROR_CODES.get(failure.provider, ErrorCode.INTERNAL_ERROR)),
    )
    return ProviderError(
        message=message or failure.message,
        status_code=status_code,
        code=code,
        details=failure.details,
        provider=failure.provider,
    )


def raise_failure(failure: ProviderFailure, message: str | None = None) -> NoReturn:
    raise to_provider_error(failure, message)


def unwrap(result: ProviderResult[T], messages: dict[FailureKind, str] | None = None) -> T:
    """Retorna o valor de Ok ou levanta ProviderError para Err.

    Args:
        result: Resultado do cliente.
        messages: Resumos por tipo de falha para esta operação.
    """
    if isinstance(result, Err):
        failure = result.error
        raise_failure(failure, (messages or {}).get(failure.kind))
    return result.value
