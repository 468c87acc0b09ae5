"""Redação de payloads e mascaramento de ids antes de logar.

Aplicado no tradutor de erros (payload da requisição) e nos serviços
(ids de página/base). Determinístico: mesma entrada, mesma saída.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Any, Final

REDACTED: Final = "[REDACTED]"

_SENSITIVE_KEY_PARTS: Final[tuple[str, ...]] = (
    "token",
    "secret",
    "password",
    "authorization",
    "api_key",
    "apikey",
)

_EMAIL_PATTERN: Final[Pattern[str]] = re.compile(
    r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"
)

MAX_LOGGED_STRING: Final = 200
MAX_DEPTH: Final = 6


def _is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in _SENSITIVE_KEY_PARTS)


def _redact_string(value: str) -> str:
    masked = _EMAIL_PATTERN.sub("[EMAIL]", value)
    if len(masked) > MAX_LOGGED_STRING:
        return masked[:MAX_LOGGED_STRING] + "...[truncated]"
    return masked


def redact_payload(payload: Any, _depth: int = 0) -> Any:
    """Retorna cópia do payload segura para log.

    - Chaves sensíveis (token, secret, authorization...) viram [REDACTED]
    - E-mails são mascarados
    - Strings longas são truncadas
    - Estruturas muito profundas são cortadas

    Examples:
        >>> redact_payload({"token": "secret_abc", "name": "ok"})
        {'token': '[REDACTED]', 'name': 'ok'}
    """
    if _depth > MAX_DEPTH:
        return "[DEPTH_LIMIT]"
    if isinstance(payload, dict):
        return {
            str(key): REDACTED if _is_sensitive_key(str(key)) else redact_payload(value, _depth + 1)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact_payload(item, _depth + 1) for item in payload]
    if isinstance(payload, str):
        return _redact_string(payload)
    return payload


def mask_identifier(value: str | None, visible: int = 6) -> str:
    """Mantém só o prefixo de um id de recurso externo.

    >>> mask_identifier("appAbCdEfGhIjKlMn")
    'appAbC...'
    """
    if not value:
        return ""
    if len(value) <= visible:
        return value
    return value[:visible] + "..."
