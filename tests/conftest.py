"""Configuração do pytest para o serviço de provisionamento."""

import os
import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

# Ambiente mínimo válido antes de qualquer import de app.app
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("NOTION_TOKEN", "secret_test_token")
os.environ.setdefault("AIRTABLE_TOKEN", "pat_test_token")
os.environ.setdefault("RATE_LIMIT_BACKEND", "memory")

from config.settings import (  # noqa: E402
    get_airtable_settings,
    get_base_settings,
    get_notion_settings,
    get_rate_limit_settings,
)

_SETTINGS_GETTERS = (
    get_airtable_settings,
    get_base_settings,
    get_notion_settings,
    get_rate_limit_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings são lru_cached; cada teste lê o ambiente de novo."""
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()
    yield
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()
