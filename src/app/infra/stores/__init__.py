"""Stores — implementações concretas de estado compartilhado.

Módulos disponíveis:
    - memory_rate_limit_store: Rate limiter em memória (processo único)
    - redis_rate_limit_store: Rate limiter usando Redis (Upstash)
"""

from __future__ import annotations

from app.infra.stores.memory_rate_limit_store import MemoryRateLimitStore
from app.infra.stores.redis_rate_limit_store import RedisRateLimitStore

__all__ = [
    "MemoryRateLimitStore",
    "RedisRateLimitStore",
]
