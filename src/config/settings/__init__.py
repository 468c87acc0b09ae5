"""Agregador de settings do serviço de provisionamento.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Provider settings
from config.settings.airtable import (
    AIRTABLE_API_BASE_URL,
    AirtableSettings,
    get_airtable_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    RateLimitBackend,
    RateLimitSettings,
    get_base_settings,
    get_rate_limit_settings,
)
from config.settings.notion import (
    NOTION_API_BASE_URL,
    NOTION_API_VERSION,
    NotionSettings,
    get_notion_settings,
)

__all__ = [
    # Constants
    "AIRTABLE_API_BASE_URL",
    "NOTION_API_BASE_URL",
    "NOTION_API_VERSION",
    # Providers
    "AirtableSettings",
    # Base
    "BaseSettings",
    "Environment",
    "NotionSettings",
    "RateLimitBackend",
    "RateLimitSettings",
    "get_airtable_settings",
    "get_base_settings",
    "get_notion_settings",
    "get_rate_limit_settings",
]
