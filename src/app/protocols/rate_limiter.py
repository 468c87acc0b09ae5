"""Protocolo de rate limiting por janela fixa.

Interface leve (ABC) dependida pelo pipeline HTTP; implementações
concretas em app/infra/stores.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    """Resultado de um hit no limitador.

    Attributes:
        allowed: False quando o hit excedeu o limite.
        count: Quantidade de hits na janela atual (incluindo este).
        limit: Máximo permitido na janela.
        reset_at: Epoch (segundos) em que a janela expira.
        now: Epoch usado na decisão.
    """

    allowed: bool
    count: int
    limit: int
    reset_at: float
    now: float

    @property
    def remaining(self) -> int:
        return max(self.limit - self.count, 0)

    @property
    def retry_after(self) -> int:
        """Segundos inteiros até a janela reabrir (mínimo 1)."""
        return max(math.ceil(self.reset_at - self.now), 1)


class RateLimiterProtocol(ABC):
    """Contador por chave com janela fixa.

    Método canônico:
    - hit(key, limit, window_seconds) -> RateLimitDecision
      Incrementa o contador da chave (abrindo janela nova se expirada)
      e compara com o limite de forma atômica.
    """

    @abstractmethod
    async def hit(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        """Registra um hit e decide se é permitido."""

    async def sweep(self) -> int:
        """Remove janelas expiradas. Retorna quantas foram removidas.

        Backends com expiração nativa não precisam sobrescrever.
        """
        return 0

    async def close(self) -> None:
        """Libera recursos do backend."""
        return None

    async def ping(self) -> None:
        """Verifica o backend; levanta exceção se indisponível."""
        return None
