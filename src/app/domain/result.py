"""Resultado explícito para chamadas a providers: Ok | Err.

Clientes de provider nunca levantam exceções para falhas remotas; devolvem
Err(ProviderFailure) com a classificação já feita. Quem chama decide se a
falha é terminal (unwrap) ou tolerada (passos best-effort).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class FailureKind(StrEnum):
    """Classes de falha independentes de provider."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNPROCESSABLE = "unprocessable"
    RATE_LIMITED = "rate_limited"
    PROVIDER_ERROR = "provider_error"


@dataclass(frozen=True, slots=True)
class ProviderFailure:
    """Falha classificada de um provider.

    Attributes:
        kind: Classe da falha.
        provider: "notion" | "airtable".
        message: Resumo legível.
        details: Mensagem bruta do provider (ou descrição padrão).
        status_code: Status HTTP devolvido pelo provider, se houver.
        provider_code: Código de erro do provider (ex: "object_not_found").
    """

    kind: FailureKind
    provider: str
    message: str
    details: str
    status_code: int | None = None
    provider_code: str | None = None


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Ok[T] | Err[E]
ProviderResult = Ok[T] | Err[ProviderFailure]

__all__ = [
    "Err",
    "FailureKind",
    "Ok",
    "ProviderFailure",
    "ProviderResult",
    "Result",
]
