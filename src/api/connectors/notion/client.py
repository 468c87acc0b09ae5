"""Cliente HTTP da API do Notion.

Um token de integração por servidor, header Notion-Version fixo.
Cada método faz uma requisição e devolve Ok(body) | Err(ProviderFailure).
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError, safe_json
from api.connectors.notion.errors import PROVIDER, parse_notion_error, transport_failure
from api.connectors.provider_logging import log_provider_error, log_success
from app.domain.result import Err, Ok, ProviderResult
from app.observability import record_latency
from app.protocols.provider_clients import JsonObject, NotionClientProtocol

if TYPE_CHECKING:
    import httpx

    from config.settings import NotionSettings

logger = logging.getLogger(__name__)


class NotionClient(HttpClient, NotionClientProtocol):
    """Cliente da API REST do Notion.

    Args:
        settings: NotionSettings com token, URL base e versão.
        transport: Transport httpx alternativo (testes).
    """

    def __init__(
        self,
        settings: NotionSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not settings.token:
            raise ValueError("NOTION_TOKEN é obrigatório para o cliente Notion")
        config = HttpClientConfig(
            base_url=settings.api_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            default_headers={
                "Authorization": f"Bearer {settings.token}",
                "Notion-Version": settings.api_version,
                "Content-Type": "application/json",
            },
        )
        super().__init__(config, transport)

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> ProviderResult[JsonObject]:
        start = time.perf_counter()
        try:
            response = await self.request(method, path, json=json, params=params)
        except HttpError as exc:
            failure = transport_failure(exc.details)
            log_provider_error(failure, operation, method, path)
            return Err(failure)
        finally:
            record_latency("notion_client", operation, (time.perf_counter() - start) * 1000)

        body = safe_json(response)
        if response.is_success:
            log_success(PROVIDER, operation, method, path, response.status_code)
            return Ok(body)

        failure = parse_notion_error(response.status_code, body)
        log_provider_error(failure, operation, method, path)
        return Err(failure)

    async def test_connection(self) -> bool:
        """Lista um usuário como chamada mínima autenticada."""
        result = await self._call("test_connection", "GET", "/users", params={"page_size": 1})
        if result.is_ok:
            logger.info("notion_connection_ok")
            return True
        logger.warning("notion_connection_failed", extra={"failure_kind": result.error.kind.value})
        return False

    async def get_page(self, page_id: str) -> ProviderResult[JsonObject]:
        return await self._call("get_page", "GET", f"/pages/{page_id}")

    async def create_database(
        self,
        parent_page_id: str,
        title: str,
        properties: JsonObject,
    ) -> ProviderResult[JsonObject]:
        payload = {
            "parent": {"type": "page_id", "page_id": parent_page_id},
            "title": [{"type": "text", "text": {"content": title}}],
            "properties": properties,
        }
        return await self._call("create_database", "POST", "/databases", json=payload)

    async def get_database(self, database_id: str) -> ProviderResult[JsonObject]:
        return await self._call("get_database", "GET", f"/databases/{database_id}")

    async def update_database(
        self,
        database_id: str,
        updates: JsonObject,
    ) -> ProviderResult[JsonObject]:
        return await self._call("update_database", "PATCH", f"/databases/{database_id}", json=updates)

    async def create_page(
        self,
        database_id: str,
        properties: JsonObject,
    ) -> ProviderResult[JsonObject]:
        payload = {
            "parent": {"type": "database_id", "database_id": database_id},
            "properties": properties,
        }
        return await self._call("create_page", "POST", "/pages", json=payload)

    async def query_database(
        self,
        database_id: str,
        query: JsonObject | None = None,
    ) -> ProviderResult[JsonObject]:
        return await self._call(
            "query_database", "POST", f"/databases/{database_id}/query", json=query or {}
        )
