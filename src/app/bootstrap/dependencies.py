"""Factories de dependências baseadas em configuração de ambiente.

As funções get_* são usadas como dependências FastAPI; testes as
substituem via app.dependency_overrides.
"""

from __future__ import annotations

import logging

from app.bootstrap.clients import (
    create_airtable_client,
    create_async_redis_client,
    create_notion_client,
)
from app.infra.stores import MemoryRateLimitStore, RedisRateLimitStore
from app.protocols.rate_limiter import RateLimiterProtocol
from app.services import AirtableBaseService, NotionDatabaseService
from config.settings import get_airtable_settings, get_base_settings, get_rate_limit_settings

logger = logging.getLogger(__name__)


def create_rate_limiter() -> RateLimiterProtocol:
    """Cria o rate limiter conforme RATE_LIMIT_BACKEND."""
    settings = get_rate_limit_settings()
    environment = get_base_settings().environment

    if settings.backend == "redis":
        limiter: RateLimiterProtocol = RedisRateLimitStore(create_async_redis_client())
        logger.info("rate_limiter_created", extra={"backend": "redis"})
        return limiter

    if settings.backend == "memory":
        if environment not in ("development", "test"):
            logger.warning(
                "memory_rate_limiter_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        limiter = MemoryRateLimitStore()
        logger.info("rate_limiter_created", extra={"backend": "memory"})
        return limiter

    msg = f"RATE_LIMIT_BACKEND inválido: {settings.backend}"
    raise ValueError(msg)


def get_notion_service() -> NotionDatabaseService:
    return NotionDatabaseService(create_notion_client())


def get_airtable_service() -> AirtableBaseService:
    return AirtableBaseService(create_airtable_client(), get_airtable_settings())
