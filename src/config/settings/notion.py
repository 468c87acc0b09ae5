"""Settings específicas do provider Notion.

Um único token de integração por servidor (sem credenciais por usuário).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

NOTION_API_BASE_URL: str = "https://api.notion.com/v1"
NOTION_API_VERSION: str = "2022-06-28"

# Tokens de integração interna: "secret_" (legado) e "ntn_" (atual)
NOTION_TOKEN_PREFIXES: tuple[str, ...] = ("secret_", "ntn_")


@dataclass(frozen=True)
class NotionSettings:
    """Configurações do provider Notion.

    Attributes:
        token: Token da integração (NOTION_TOKEN)
        api_base_url: URL base da API REST
        api_version: Header Notion-Version
        request_timeout_seconds: Timeout por chamada HTTP
    """

    token: str = ""
    api_base_url: str = NOTION_API_BASE_URL
    api_version: str = NOTION_API_VERSION
    request_timeout_seconds: float = 30.0

    def validate(self) -> list[str]:
        """Valida token e parâmetros HTTP.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.token:
            errors.append("NOTION_TOKEN não configurado")
        elif not self.token.startswith(NOTION_TOKEN_PREFIXES):
            errors.append(
                "NOTION_TOKEN inválido: deve começar com "
                + " ou ".join(f'"{prefix}"' for prefix in NOTION_TOKEN_PREFIXES)
            )

        if self.request_timeout_seconds <= 0:
            errors.append("PROVIDER_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> NotionSettings:
    """Carrega NotionSettings a partir de variáveis de ambiente."""
    return NotionSettings(
        token=os.getenv("NOTION_TOKEN", ""),
        api_base_url=os.getenv("NOTION_API_BASE_URL", NOTION_API_BASE_URL),
        api_version=os.getenv("NOTION_VERSION", NOTION_API_VERSION),
        request_timeout_seconds=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_notion_settings() -> NotionSettings:
    """Retorna instância cacheada de NotionSettings."""
    return _load_from_env()
