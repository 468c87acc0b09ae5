"""Serviço de provisionamento de database Notion.

Fluxo: página pai verificada → schema derivado da BuildConfig →
database criada → página de exemplo (best effort) → resultado.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.domain.result import Err, FailureKind, Ok, ProviderFailure, Result
from app.domain.schema import NotionProvisionResult
from app.observability import record_latency
from app.services.provider_errors import unwrap
from app.services.schema_mapper import (
    build_notion_sample_properties,
    map_config_to_schema,
    to_notion_properties,
)
from config.logging import log_fallback, mask_identifier

if TYPE_CHECKING:
    from app.domain.build_config import BuildConfig
    from app.protocols.provider_clients import NotionClientProtocol

logger = logging.getLogger(__name__)

DATABASE_TITLE = "Chat Session Management"
NOTION_WEB_URL = "https://www.notion.so"

_PARENT_PAGE_MESSAGES = {
    FailureKind.NOT_FOUND: "Notion page not found",
    FailureKind.FORBIDDEN: "Notion integration not authorized",
}

_CREATE_DATABASE_MESSAGES = {
    FailureKind.NOT_FOUND: "Parent page not found",
    FailureKind.UNPROCESSABLE: "Invalid database configuration",
    FailureKind.FORBIDDEN: "Insufficient permissions",
    FailureKind.PROVIDER_ERROR: "Failed to create Notion database",
}


def fallback_database_url(database_id: str) -> str:
    return f"{NOTION_WEB_URL}/{database_id.replace('-', '')}"


class NotionDatabaseService:
    """Cria a database de sessões de chat numa página do usuário."""

    def __init__(self, client: NotionClientProtocol) -> None:
        self._client = client

    async def test_connection(self) -> bool:
        return await self._client.test_connection()

    async def provision(
        self,
        parent_page_id: str,
        config: BuildConfig,
        seed_sample: bool = True,
    ) -> NotionProvisionResult:
        """Provisiona a database.

        Raises:
            ProviderError: Página pai inacessível ou criação recusada.
        """
        start = time.perf_counter()

        unwrap(await self._client.get_page(parent_page_id), _PARENT_PAGE_MESSAGES)

        schema = map_config_to_schema(config)
        properties = to_notion_properties(schema)
        logger.debug(
            "notion_database_creating",
            extra={
                "parent_page_id": mask_identifier(parent_page_id, 8),
                "property_count": len(properties),
            },
        )

        database = unwrap(
            await self._client.create_database(parent_page_id, DATABASE_TITLE, properties),
            _CREATE_DATABASE_MESSAGES,
        )
        database_id = str(database.get("id", ""))
        url = database.get("url")
        if not url:
            url = fallback_database_url(database_id)
            log_fallback(logger, "notion_database_url", reason="missing_url")

        sample_page_id: str | None = None
        if seed_sample:
            seeded = await self.seed_sample(database_id, config)
            if isinstance(seeded, Ok):
                sample_page_id = seeded.value
            else:
                logger.info(
                    "notion_sample_seed_failed",
                    extra={
                        "database_id": database_id,
                        "failure_kind": seeded.error.kind.value,
                        "details": seeded.error.details,
                    },
                )

        result = NotionProvisionResult(
            id=database_id,
            url=str(url),
            properties=schema.property_types(),
            views=schema.view_names(),
            sample_page_id=sample_page_id,
        )
        latency_ms = (time.perf_counter() - start) * 1000
        record_latency("notion_database", "provision", latency_ms)
        logger.info(
            "notion_database_created",
            extra={
                "database_id": database_id,
                "property_count": len(result.properties),
                "view_count": len(result.views),
                "sample_created": sample_page_id is not None,
            },
        )
        return result

    async def seed_sample(self, database_id: str, config: BuildConfig) -> Result[str, ProviderFailure]:
        """Cria uma página de exemplo. Nunca levanta: exceções viram Err."""
        properties = build_notion_sample_properties(config)
        try:
            created = await self._client.create_page(database_id, properties)
        except Exception as exc:
            logger.exception("notion_sample_seed_exception", extra={"database_id": database_id})
            return Err(
                ProviderFailure(
                    kind=FailureKind.PROVIDER_ERROR,
                    provider="notion",
                    message="Failed to create sample page",
                    details=str(exc) or type(exc).__name__,
                )
            )
        if isinstance(created, Err):
            return created
        return Ok(str(created.value.get("id", "")))
