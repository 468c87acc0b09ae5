"""Settings base do serviço de provisionamento.

Configurações comuns a todas as rotas e providers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "test", "staging", "production"]

DEFAULT_SERVICE_NAME = "chat-session-provisioner"
DEFAULT_API_VERSION = "2.0.0"
DEFAULT_MAX_REQUEST_BYTES = 1024 * 1024  # 1MB


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|test|staging|production)
        service_name: Nome do serviço para logs
        api_version: Versão exposta em /health e no header X-API-Version
        debug: Modo debug ativo
        allowed_origins: Origins liberadas no CORS
        max_request_bytes: Tamanho máximo de body aceito (Content-Length)
        redis_url: URL de conexão Redis (rate limit distribuído)
        trust_proxy: Usa o primeiro hop de X-Forwarded-For como IP do cliente
    """

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    api_version: str = DEFAULT_API_VERSION
    debug: bool = False
    allowed_origins: tuple[str, ...] = field(default=("http://localhost:5173",))
    max_request_bytes: int = DEFAULT_MAX_REQUEST_BYTES
    redis_url: str = ""
    trust_proxy: bool = False

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento ou teste."""
        return self.environment in ("development", "test")

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "test", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.max_request_bytes <= 0:
            errors.append("MAX_REQUEST_BYTES deve ser > 0")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    if env_lower == "test":
        return "test"
    return "development"


def _parse_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        api_version=os.getenv("API_VERSION", DEFAULT_API_VERSION),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        allowed_origins=_parse_origins(
            os.getenv("ALLOWED_ORIGINS", "http://localhost:5173")
        ),
        max_request_bytes=int(
            os.getenv("MAX_REQUEST_BYTES", str(DEFAULT_MAX_REQUEST_BYTES))
        ),
        redis_url=os.getenv("REDIS_URL", ""),
        trust_proxy=os.getenv("TRUST_PROXY", "").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
