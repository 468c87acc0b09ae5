"""Settings de rate limiting.

Dois limitadores independentes por IP: geral (todas as rotas exceto
health) e de provisionamento (apenas as rotas POST de provisionamento).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

RateLimitBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class RateLimitSettings:
    """Configurações de rate limiting.

    Attributes:
        backend: Backend do contador (memory|redis)
        window_seconds: Janela do limitador geral
        max_requests: Máximo de requisições por janela (geral)
        provisioning_window_seconds: Janela do limitador de provisionamento
        provisioning_max_requests: Máximo de provisionamentos por janela
        sweep_interval_seconds: Intervalo de limpeza de janelas expiradas (memory)
    """

    backend: RateLimitBackend = "memory"
    window_seconds: int = 60
    max_requests: int = 60
    provisioning_window_seconds: int = 15 * 60
    provisioning_max_requests: int = 10
    sweep_interval_seconds: int = 5 * 60

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de rate limit.

        Args:
            base: BaseSettings para verificar redis_url.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"RATE_LIMIT_BACKEND inválido: {self.backend}")

        if self.backend == "redis" and not base.redis_url:
            errors.append("RATE_LIMIT_BACKEND=redis requer REDIS_URL configurado")

        if self.window_seconds <= 0 or self.provisioning_window_seconds <= 0:
            errors.append("Janelas de rate limit devem ser > 0")

        if self.max_requests < 1 or self.provisioning_max_requests < 1:
            errors.append("Limites de rate limit devem ser >= 1")

        return errors


def _load_rate_limit_from_env() -> RateLimitSettings:
    """Carrega RateLimitSettings de variáveis de ambiente."""
    backend_str = os.getenv("RATE_LIMIT_BACKEND", "memory").lower()
    backend: RateLimitBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return RateLimitSettings(
        backend=backend,
        window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
        max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "60")),
        provisioning_window_seconds=int(
            os.getenv("PROVISIONING_RATE_LIMIT_WINDOW_SECONDS", str(15 * 60))
        ),
        provisioning_max_requests=int(
            os.getenv("PROVISIONING_RATE_LIMIT_MAX_REQUESTS", "10")
        ),
        sweep_interval_seconds=int(os.getenv("RATE_LIMIT_SWEEP_SECONDS", str(5 * 60))),
    )


@lru_cache(maxsize=1)
def get_rate_limit_settings() -> RateLimitSettings:
    """Retorna instância cacheada de RateLimitSettings."""
    return _load_rate_limit_from_env()
