"""Redis Rate Limit Store — contadores compartilhados entre réplicas.

Janela fixa com INCR + EXPIRE NX numa pipeline: o primeiro hit da
janela define o TTL, os seguintes só incrementam. Expiração é do
próprio Redis, então não há sweep.

Contrato de Keys:
    As keys são "<limitador>:<ip>". Nada além do IP de origem entra na key.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from app.protocols.rate_limiter import RateLimitDecision, RateLimiterProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "ratelimit:"


class RedisRateLimitStore(RateLimiterProtocol):
    """Rate limiter usando Redis (Upstash compatível).

    Args:
        async_redis_client: Cliente redis.asyncio
        clock: Fonte de tempo em epoch segundos (injetável em testes)
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._redis = async_redis_client
        self._clock = clock

    def _key(self, key: str) -> str:
        return f"{RATE_LIMIT_PREFIX}{key}"

    async def hit(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        redis_key = self._key(key)
        now = self._clock()
        try:
            pipeline = self._redis.pipeline()
            pipeline.incr(redis_key)
            pipeline.expire(redis_key, window_seconds, nx=True)
            pipeline.ttl(redis_key)
            count, _, ttl = await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao incrementar rate limit no Redis") from exc

        # ttl < 0: chave sem expiração (não deveria ocorrer com EXPIRE NX)
        remaining_ttl = ttl if ttl and ttl > 0 else window_seconds
        count = int(count)
        if count > limit:
            logger.debug(
                "rate_limit_exceeded_redis",
                extra={"limiter": key.split(":", 1)[0], "count": count, "limit": limit},
            )
        return RateLimitDecision(
            allowed=count <= limit,
            count=count,
            limit=limit,
            reset_at=now + remaining_ttl,
            now=now,
        )

    async def close(self) -> None:
        await self._redis.aclose()

    async def ping(self) -> None:
        await self._redis.ping()
