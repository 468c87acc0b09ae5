"""Screening de conteúdo suspeito e sanitização de strings.

O screening roda sobre body bruto + URL + User-Agent antes de qualquer
parsing. A sanitização roda depois da validação, em cada folha string.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Any, Final

SUSPICIOUS_PATTERNS: Final[tuple[Pattern[str], ...]] = (
    re.compile(r"\.\."),  # directory traversal
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"union.*select", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"data:", re.IGNORECASE),
)

_ANGLE_BRACKETS: Final = re.compile(r"[<>]")
_JS_PROTOCOL: Final = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER: Final = re.compile(r"on\w+=", re.IGNORECASE)


def find_suspicious_pattern(*parts: str) -> str | None:
    """Retorna o primeiro padrão suspeito encontrado, ou None."""
    haystack = "".join(parts)
    for pattern in SUSPICIOUS_PATTERNS:
        if pattern.search(haystack):
            return pattern.pattern
    return None


def sanitize_string(value: str) -> str:
    """Remove < e >, protocolo javascript: e handlers on*=; depois trim."""
    cleaned = _ANGLE_BRACKETS.sub("", value)
    cleaned = _JS_PROTOCOL.sub("", cleaned)
    cleaned = _EVENT_HANDLER.sub("", cleaned)
    return cleaned.strip()


def sanitize_value(value: Any) -> Any:
    """Aplica sanitize_string em toda folha string (dicts e listas recursivamente)."""
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, dict):
        return {key: sanitize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize_value(item) for item in value]
    return value
