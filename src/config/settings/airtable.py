"""Settings específicas do provider Airtable."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

AIRTABLE_API_BASE_URL: str = "https://api.airtable.com/v0"
AIRTABLE_WEB_URL: str = "https://airtable.com"

# Personal access tokens sempre começam com "pat"
AIRTABLE_TOKEN_PREFIX: str = "pat"


@dataclass(frozen=True)
class AirtableSettings:
    """Configurações do provider Airtable.

    Attributes:
        token: Personal access token (AIRTABLE_TOKEN)
        api_base_url: URL base da API REST
        request_timeout_seconds: Timeout por chamada HTTP
    """

    token: str = ""
    api_base_url: str = AIRTABLE_API_BASE_URL
    request_timeout_seconds: float = 30.0

    def base_url(self, base_id: str) -> str:
        """URL pública da base para o usuário abrir no navegador."""
        return f"{AIRTABLE_WEB_URL}/{base_id}"

    def validate(self) -> list[str]:
        errors: list[str] = []

        if not self.token:
            errors.append("AIRTABLE_TOKEN não configurado")
        elif not self.token.startswith(AIRTABLE_TOKEN_PREFIX):
            errors.append(f'AIRTABLE_TOKEN inválido: deve começar com "{AIRTABLE_TOKEN_PREFIX}"')

        if self.request_timeout_seconds <= 0:
            errors.append("PROVIDER_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> AirtableSettings:
    """Carrega AirtableSettings a partir de variáveis de ambiente."""
    return AirtableSettings(
        token=os.getenv("AIRTABLE_TOKEN", ""),
        api_base_url=os.getenv("AIRTABLE_API_BASE_URL", AIRTABLE_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_airtable_settings() -> AirtableSettings:
    """Retorna instância cacheada de AirtableSettings."""
    return _load_from_env()
