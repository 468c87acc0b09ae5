"""Classificação de erros da API do Airtable.

Corpo de erro: {"error": {"type": "...", "message": "..."}} ou, em
alguns 404, apenas {"error": "NOT_FOUND"}. Status HTTP tem precedência;
o tipo do erro só decide quando o status não é conhecido.
"""

from __future__ import annotations

from typing import Any

from app.domain.result import FailureKind, ProviderFailure

PROVIDER = "airtable"

# Tipo devolvido quando a base existe mas a tabela não
TABLE_NOT_FOUND = "TABLE_NOT_FOUND"

_STATUS_TO_KIND: dict[int, FailureKind] = {
    401: FailureKind.UNAUTHORIZED,
    403: FailureKind.FORBIDDEN,
    404: FailureKind.NOT_FOUND,
    422: FailureKind.UNPROCESSABLE,
    429: FailureKind.RATE_LIMITED,
}

_MESSAGES: dict[FailureKind, tuple[str, str]] = {
    FailureKind.UNAUTHORIZED: (
        "Invalid Airtable token",
        "The provided Airtable token is invalid or expired",
    ),
    FailureKind.FORBIDDEN: (
        "Insufficient Airtable permissions",
        "The token does not have permission to access this resource",
    ),
    FailureKind.NOT_FOUND: (
        "Airtable resource not found",
        "The requested base, table, or record was not found",
    ),
    FailureKind.UNPROCESSABLE: (
        "Invalid Airtable data",
        "The provided data is invalid or does not match the table schema",
    ),
    FailureKind.RATE_LIMITED: (
        "Airtable rate limit exceeded",
        "Too many requests to Airtable API. Please retry later",
    ),
}


def _extract_error(payload: dict[str, Any]) -> tuple[str | None, str]:
    error = payload.get("error")
    if isinstance(error, str):
        return error, ""
    if isinstance(error, dict):
        error_type = error.get("type") if isinstance(error.get("type"), str) else None
        message = error.get("message") if isinstance(error.get("message"), str) else ""
        return error_type, message
    return None, ""


def classify(status_code: int, error_type: str | None) -> FailureKind:
    if status_code in _STATUS_TO_KIND:
        return _STATUS_TO_KIND[status_code]
    if error_type and "NOT_FOUND" in error_type:
        return FailureKind.NOT_FOUND
    return FailureKind.PROVIDER_ERROR


def parse_airtable_error(
    status_code: int,
    payload: dict[str, Any],
    default_message: str = "Airtable API error",
) -> ProviderFailure:
    """Converte resposta de erro do Airtable em ProviderFailure.

    Args:
        status_code: Status HTTP da resposta
        payload: Body JSON (pode estar vazio)
        default_message: Resumo usado para PROVIDER_ERROR
    """
    error_type, provider_message = _extract_error(payload)
    kind = classify(status_code, error_type)

    if kind is FailureKind.PROVIDER_ERROR:
        message = default_message
        details = provider_message or error_type or f"Airtable API returned HTTP {status_code}"
    elif kind is FailureKind.NOT_FOUND and status_code not in _STATUS_TO_KIND:
        message, details = "Table not found", "The specified table does not exist in this base"
    else:
        message, details = _MESSAGES[kind]

    return ProviderFailure(
        kind=kind,
        provider=PROVIDER,
        message=message,
        details=details,
        status_code=status_code,
        provider_code=error_type,
    )


def transport_failure(details: str) -> ProviderFailure:
    """Falha sem resposta HTTP (timeout, conexão recusada)."""
    return ProviderFailure(
        kind=FailureKind.PROVIDER_ERROR,
        provider=PROVIDER,
        message="Airtable API unreachable",
        details=details,
    )
