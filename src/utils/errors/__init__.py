"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ApiError,
    ErrorCode,
    InfrastructureError,
    ProviderError,
    RateLimitExceededError,
    RedisConnectionError,
    RequestTooLargeError,
    SecurityViolationError,
    UnsupportedMediaTypeError,
    ValidationFailedError,
)

__all__ = [
    "ApiError",
    "ErrorCode",
    "InfrastructureError",
    "ProviderError",
    "RateLimitExceededError",
    "RedisConnectionError",
    "RequestTooLargeError",
    "SecurityViolationError",
    "UnsupportedMediaTypeError",
    "ValidationFailedError",
]
