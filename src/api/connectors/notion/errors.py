"""Classificação de erros da API do Notion.

O body de erro do Notion tem a forma
{"object": "error", "status": 404, "code": "object_not_found", "message": "..."}.
O campo "code" tem precedência; o status HTTP é usado quando ele falta.
"""

from __future__ import annotations

from typing import Any

from app.domain.result import FailureKind, ProviderFailure

PROVIDER = "notion"

_CODE_TO_KIND: dict[str, FailureKind] = {
    "object_not_found": FailureKind.NOT_FOUND,
    "unauthorized": FailureKind.UNAUTHORIZED,
    "restricted_resource": FailureKind.FORBIDDEN,
    "validation_error": FailureKind.UNPROCESSABLE,
    "rate_limited": FailureKind.RATE_LIMITED,
}

_STATUS_TO_KIND: dict[int, FailureKind] = {
    401: FailureKind.UNAUTHORIZED,
    403: FailureKind.FORBIDDEN,
    404: FailureKind.NOT_FOUND,
    429: FailureKind.RATE_LIMITED,
}

_MESSAGES: dict[FailureKind, str] = {
    FailureKind.NOT_FOUND: "Notion resource not found",
    FailureKind.UNAUTHORIZED: "Invalid Notion token",
    FailureKind.FORBIDDEN: "Notion integration not authorized",
    FailureKind.UNPROCESSABLE: "Invalid Notion request",
    FailureKind.RATE_LIMITED: "Notion rate limit exceeded",
    FailureKind.PROVIDER_ERROR: "Notion API error",
}

_DEFAULT_DETAILS: dict[FailureKind, str] = {
    FailureKind.NOT_FOUND: (
        "The requested page or database does not exist or the integration does not have access to it"
    ),
    FailureKind.UNAUTHORIZED: "The configured Notion token is invalid or expired",
    FailureKind.FORBIDDEN: "The integration needs to be shared with the page with appropriate permissions",
    FailureKind.UNPROCESSABLE: "The database properties or structure is invalid",
    FailureKind.RATE_LIMITED: "Too many requests to the Notion API. Please retry later",
    FailureKind.PROVIDER_ERROR: "Unexpected response from the Notion API",
}


def classify(status_code: int, code: str | None) -> FailureKind:
    if code and code in _CODE_TO_KIND:
        return _CODE_TO_KIND[code]
    return _STATUS_TO_KIND.get(status_code, FailureKind.PROVIDER_ERROR)


def parse_notion_error(status_code: int, payload: dict[str, Any]) -> ProviderFailure:
    """Converte resposta de erro do Notion em ProviderFailure.

    Args:
        status_code: Status HTTP da resposta
        payload: Body JSON (pode estar vazio)
    """
    code = payload.get("code") if isinstance(payload.get("code"), str) else None
    provider_message = payload.get("message") if isinstance(payload.get("message"), str) else ""
    kind = classify(status_code, code)

    if kind is FailureKind.PROVIDER_ERROR:
        details = provider_message or f"Notion API returned HTTP {status_code}"
    else:
        details = provider_message or _DEFAULT_DETAILS[kind]

    return ProviderFailure(
        kind=kind,
        provider=PROVIDER,
        message=_MESSAGES[kind],
        details=details,
        status_code=status_code,
        provider_code=code,
    )


def transport_failure(details: str) -> ProviderFailure:
    """Falha sem resposta HTTP (timeout, conexão recusada)."""
    return ProviderFailure(
        kind=FailureKind.PROVIDER_ERROR,
        provider=PROVIDER,
        message="Notion API unreachable",
        details=details,
    )
