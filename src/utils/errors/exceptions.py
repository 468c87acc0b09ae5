"""Exceções estruturadas da API de provisionamento.

Toda falha observável externamente é um ApiError (ou subclasse) com
status HTTP, código estável e detalhes legíveis. O tradutor terminal
(api/errors/handlers.py) converte essas exceções no ErrorEnvelope.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Códigos estáveis expostos no campo `code` do envelope de erro."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CONTENT_TYPE = "INVALID_CONTENT_TYPE"
    REQUEST_TOO_LARGE = "REQUEST_TOO_LARGE"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    PROVISIONING_RATE_LIMIT_EXCEEDED = "PROVISIONING_RATE_LIMIT_EXCEEDED"
    SECURITY_VIOLATION = "SECURITY_VIOLATION"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    UNPROCESSABLE_ENTITY = "UNPROCESSABLE_ENTITY"
    PROVIDER_RATE_LIMITED = "PROVIDER_RATE_LIMITED"
    NOTION_ERROR = "NOTION_ERROR"
    AIRTABLE_ERROR = "AIRTABLE_ERROR"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ApiError(Exception):
    """Erro estruturado com status HTTP, código e detalhes."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: ErrorCode | str = ErrorCode.INTERNAL_ERROR,
        details: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = str(code)
        self.details = details or message

    def extra_fields(self) -> dict[str, Any]:
        """Campos adicionais do envelope (além de error/code/details)."""
        return {}

    def append_request_id(self, request_id: str) -> None:
        """Anexa o request id aos detalhes para correlação com suporte."""
        if request_id and request_id not in self.details:
            self.details = f"{self.details} (Request ID: {request_id})"


class ValidationFailedError(ApiError):
    """Payload inválido — lista todas as violações por campo."""

    def __init__(
        self,
        fields: list[dict[str, Any]],
        details: str = "One or more fields are invalid",
    ) -> None:
        super().__init__("Validation failed", 400, ErrorCode.VALIDATION_ERROR, details)
        self.fields = fields

    def extra_fields(self) -> dict[str, Any]:
        return {"fields": self.fields}


class UnsupportedMediaTypeError(ApiError):
    def __init__(self) -> None:
        super().__init__(
            "Unsupported Media Type",
            415,
            ErrorCode.INVALID_CONTENT_TYPE,
            "Content-Type must be application/json",
        )


class RequestTooLargeError(ApiError):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            "Request too large",
            413,
            ErrorCode.REQUEST_TOO_LARGE,
            f"Request body exceeds maximum allowed size of {max_bytes} bytes",
        )


class SecurityViolationError(ApiError):
    def __init__(self) -> None:
        super().__init__(
            "Suspicious activity detected",
            403,
            ErrorCode.SECURITY_VIOLATION,
            "Request contains potentially malicious content",
        )


class RateLimitExceededError(ApiError):
    """Limite de requisições excedido; carrega `retryAfter` em segundos."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: str,
        retry_after: int,
    ) -> None:
        super().__init__(message, 429, code, details)
        self.retry_after = retry_after

    def extra_fields(self) -> dict[str, Any]:
        return {"retryAfter": self.retry_after}


class ProviderError(ApiError):
    """Falha de provider (Notion/Airtable) já classificada na borda do cliente."""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: ErrorCode,
        details: str,
        provider: str,
    ) -> None:
        super().__init__(message, status_code, code, details)
        self.provider = provider


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""
