"""Request id da requisição HTTP em andamento.

O id é gerado (ou aceito do header X-Request-ID) pelo middleware de
contexto, injetado em todo log e devolvido no header de resposta e
nos detalhes de erro. Usa ContextVar para ser async-safe.
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Ids recebidos do cliente só são aceitos se forem curtos e sem caracteres de controle
_INBOUND_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{8,128}$")


def get_correlation_id() -> str:
    """Retorna o request id do contexto atual ou string vazia."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o request id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None ou inválido, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id if is_acceptable_inbound_id(correlation_id) else generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def is_acceptable_inbound_id(value: str | None) -> bool:
    return bool(value) and _INBOUND_ID_PATTERN.match(value) is not None
