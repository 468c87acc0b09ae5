"""Rate limiter em memória — processo único.

Não compartilha contadores entre réplicas; para isso usar
RedisRateLimitStore. Janelas expiradas são removidas pelo sweep
periódico iniciado no lifespan da app.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from app.protocols.rate_limiter import RateLimitDecision, RateLimiterProtocol

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Window:
    count: int
    reset_at: float


class MemoryRateLimitStore(RateLimiterProtocol):
    """Contadores por chave com janela fixa, protegidos por lock.

    Args:
        clock: Fonte de tempo em epoch segundos (injetável em testes).
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _hit_sync(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or window.reset_at <= now:
                window = _Window(count=0, reset_at=now + window_seconds)
                self._windows[key] = window
            window.count += 1
            count = window.count
            reset_at = window.reset_at
        return RateLimitDecision(
            allowed=count <= limit,
            count=count,
            limit=limit,
            reset_at=reset_at,
            now=now,
        )

    async def hit(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        return self._hit_sync(key, limit, window_seconds)

    def sweep_expired(self) -> int:
        """Remove janelas expiradas (sync)."""
        now = self._clock()
        with self._lock:
            expired = [key for key, window in self._windows.items() if window.reset_at <= now]
            for key in expired:
                del self._windows[key]
        if expired:
            logger.debug("rate_limit_windows_swept", extra={"removed": len(expired)})
        return len(expired)

    async def sweep(self) -> int:
        return self.sweep_expired()

    def __len__(self) -> int:
        return len(self._windows)
