"""Definições de schema derivadas da BuildConfig.

Estruturas efêmeras: construídas a cada requisição e descartadas depois.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class SelectOption:
    name: str
    color: str


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Campo lógico: tipo do provider e opções (select/multi_select/number)."""

    name: str
    type: str
    options: tuple[SelectOption, ...] = ()
    number_format: str | None = None


@dataclass(frozen=True, slots=True)
class ViewSpec:
    name: str
    type: str = "table"
    filter: str | None = None


@dataclass(frozen=True)
class SchemaDefinition:
    """Mapa ordenado nome → FieldSpec mais lista ordenada de views."""

    fields: dict[str, FieldSpec]
    views: tuple[ViewSpec, ...]

    def property_types(self) -> dict[str, str]:
        """Resumo nome → tipo usado na resposta HTTP."""
        return {name: spec.type for name, spec in self.fields.items()}

    def view_names(self) -> list[str]:
        return [view.name for view in self.views]


@dataclass(frozen=True)
class AirtableChecklist:
    """O que a tabela do usuário deveria conter (schema é do usuário)."""

    required: tuple[str, ...]
    optional: tuple[str, ...] = field(default_factory=tuple)

    def missing_required(self, actual_fields: list[str]) -> list[str]:
        """Campos obrigatórios ausentes (comparação case-insensitive)."""
        present = {name.lower() for name in actual_fields}
        return [name for name in self.required if name.lower() not in present]


@dataclass(frozen=True)
class NotionProvisionResult:
    id: str
    url: str
    properties: dict[str, str]
    views: list[str]
    sample_page_id: str | None = None


@dataclass(frozen=True)
class AirtableValidationResult:
    valid: bool
    table: str
    fields: list[str]
    record_count: int
    missing_fields: list[str]
    warnings: list[str]


@dataclass(frozen=True)
class AirtableProvisionResult:
    url: str
    table: str
    fields: list[str]
    record_count: int
    warnings: list[str]
    sample_record_id: str | None = None

    def as_response(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "url": self.url,
            "table": self.table,
            "fields": self.fields,
            "recordCount": self.record_count,
            "warnings": self.warnings,
        }
        if self.sample_record_id is not None:
            payload["sampleRecordId"] = self.sample_record_id
        return payload
