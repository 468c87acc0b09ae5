"""Factories de clientes externos — Redis e providers (Notion, Airtable)."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from api.connectors.airtable import AirtableClient
from api.connectors.notion import NotionClient
from config.settings import get_airtable_settings, get_base_settings, get_notion_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Redis Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis:
    """Cria cliente Redis assíncrono (singleton).

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info("async_redis_client_created", extra={"host": host})
    return client


# ──────────────────────────────────────────────────────────────────────────────
# Provider Client Factories
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_notion_client() -> NotionClient:
    """Cria cliente Notion (singleton, um token por servidor).

    Raises:
        ValueError: Se NOTION_TOKEN não configurado
    """
    client = NotionClient(get_notion_settings())
    logger.info("notion_client_created")
    return client


@lru_cache(maxsize=1)
def create_airtable_client() -> AirtableClient:
    """Cria cliente Airtable (singleton, um token por servidor).

    Raises:
        ValueError: Se AIRTABLE_TOKEN não configurado
    """
    client = AirtableClient(get_airtable_settings())
    logger.info("airtable_client_created")
    return client


async def close_provider_clients() -> None:
    """Fecha os httpx.AsyncClient dos providers já criados."""
    if create_notion_client.cache_info().currsize:
        await create_notion_client().aclose()
    if create_airtable_client.cache_info().currsize:
        await create_airtable_client().aclose()
