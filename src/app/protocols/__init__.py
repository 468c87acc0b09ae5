"""Protocolos e contratos do core da aplicação."""

from .provider_clients import AirtableClientProtocol, JsonObject, NotionClientProtocol
from .rate_limiter import RateLimitDecision, RateLimiterProtocol

__all__ = [
    "AirtableClientProtocol",
    "JsonObject",
    "NotionClientProtocol",
    "RateLimitDecision",
    "RateLimiterProtocol",
]
