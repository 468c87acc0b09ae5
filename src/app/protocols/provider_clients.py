"""Contratos dos clientes de provider (Notion, Airtable).

Evita dependência direta da camada api nos serviços de provisionamento.
Toda operação faz exatamente uma chamada HTTP e devolve Ok | Err.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.domain.result import ProviderResult

JsonObject = dict[str, Any]


class NotionClientProtocol(ABC):
    """Operações usadas sobre a API do Notion."""

    @abstractmethod
    async def test_connection(self) -> bool:
        """True se o token autentica."""

    @abstractmethod
    async def get_page(self, page_id: str) -> ProviderResult[JsonObject]: ...

    @abstractmethod
    async def create_database(
        self,
        parent_page_id: str,
        title: str,
        properties: JsonObject,
    ) -> ProviderResult[JsonObject]: ...

    @abstractmethod
    async def get_database(self, database_id: str) -> ProviderResult[JsonObject]: ...

    @abstractmethod
    async def update_database(
        self,
        database_id: str,
        updates: JsonObject,
    ) -> ProviderResult[JsonObject]: ...

    @abstractmethod
    async def create_page(
        self,
        database_id: str,
        properties: JsonObject,
    ) -> ProviderResult[JsonObject]: ...

    @abstractmethod
    async def query_database(
        self,
        database_id: str,
        query: JsonObject | None = None,
    ) -> ProviderResult[JsonObject]: ...


class AirtableClientProtocol(ABC):
    """Operações usadas sobre a API do Airtable."""

    @abstractmethod
    async def test_connection(self, base_id: str) -> bool:
        """True se a base é alcançável com o token atual."""

    @abstractmethod
    async def check_base(self, base_id: str) -> ProviderResult[bool]:
        """Ok(True) se a base responde; Err com a classificação da falha."""

    @abstractmethod
    async def list_tables(self, base_id: str) -> ProviderResult[list[str]]:
        """Nomes de tabelas encontrados por sondagem (aproximação)."""

    @abstractmethod
    async def table_exists(self, base_id: str, table_name: str) -> ProviderResult[bool]: ...

    @abstractmethod
    async def get_table_fields(self, base_id: str, table_name: str) -> ProviderResult[list[str]]: ...

    @abstractmethod
    async def get_records(
        self,
        base_id: str,
        table_name: str,
        max_records: int = 100,
    ) -> ProviderResult[list[JsonObject]]: ...

    @abstractmethod
    async def create_record(
        self,
        base_id: str,
        table_name: str,
        fields: JsonObject,
    ) -> ProviderResult[JsonObject]: ...

    @abstractmethod
    async def update_record(
        self,
        base_id: str,
        table_name: str,
        record_id: str,
        fields: JsonObject,
    ) -> ProviderResult[JsonObject]: ...

    @abstractmethod
    async def delete_record(
        self,
        base_id: str,
        table_name: str,
        record_id: str,
    ) -> ProviderResult[bool]: ...
