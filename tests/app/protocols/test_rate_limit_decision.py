"""Testes de RateLimitDecision."""

from __future__ import annotations

from app.protocols.rate_limiter import RateLimitDecision


def test_remaining_never_negative() -> None:
    decision = RateLimitDecision(allowed=False, count=12, limit=10, reset_at=100.0, now=40.0)

    assert decision.remaining == 0
    assert decision.retry_after == 60


def test_retry_after_rounds_up() -> None:
    decision = RateLimitDecision(allowed=False, count=2, limit=1, reset_at=100.0, now=99.2)

    assert decision.retry_after == 1
