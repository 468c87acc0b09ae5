"""Modelos de requisição das rotas de provisionamento.

Todas as violações são coletadas de uma vez pelo FastAPI e traduzidas
para VALIDATION_ERROR com a lista `fields`. Chaves desconhecidas são
ignoradas.
"""

from __future__ import annotations

import re
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.validators.security import sanitize_value
from app.domain.build_config import BuildConfig, Feature, Priority

NOTION_PAGE_ID_PATTERN = r"^[a-zA-Z0-9-]{32}$"
AIRTABLE_BASE_ID_PATTERN = r"^app[a-zA-Z0-9]{14}$"

AIRTABLE_BASE_ID_MESSAGE = 'Base ID must start with "app" followed by 14 alphanumeric characters'

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigRequest(BuildConfig):
    """BuildConfig como chega do wizard: ao menos uma prioridade e uma feature."""

    priorities: frozenset[Priority] = Field(min_length=1)
    features: frozenset[Feature] = Field(min_length=1)


class ProvisionNotionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    parent_page_id: str = Field(alias="parentPageId")
    config: ConfigRequest

    @field_validator("parent_page_id")
    @classmethod
    def _check_page_id(cls, value: str) -> str:
        if len(value) != 32:
            raise ValueError("Parent page ID must be exactly 32 characters")
        if not re.fullmatch(NOTION_PAGE_ID_PATTERN, value):
            raise ValueError("Parent page ID contains invalid characters")
        return value


class ProvisionAirtableRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    base_id: str = Field(alias="baseId", pattern=AIRTABLE_BASE_ID_PATTERN)
    seed_sample: bool = Field(default=False, alias="seedSample")
    config: ConfigRequest | None = None


def sanitized(model: ModelT) -> ModelT:
    """Cópia do modelo com todas as strings sanitizadas e revalidadas."""
    data: dict[str, Any] = sanitize_value(model.model_dump(by_alias=True, mode="json"))
    return type(model).model_validate(data)
