"""Pipeline HTTP: contexto, guardas de entrada e rate limiting."""

from api.middleware.context import RequestContextMiddleware
from api.middleware.guards import RequestGuardMiddleware
from api.middleware.rate_limit import RateLimitMiddleware, enforce_provisioning_rate_limit

__all__ = [
    "RateLimitMiddleware",
    "RequestContextMiddleware",
    "RequestGuardMiddleware",
    "enforce_provisioning_rate_limit",
]
