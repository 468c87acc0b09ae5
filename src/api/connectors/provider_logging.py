"""Helpers de logging para chamadas a providers (sem tokens nem payloads)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.result import ProviderFailure

logger = logging.getLogger(__name__)


def log_provider_error(
    failure: ProviderFailure,
    operation: str,
    method: str,
    endpoint: str,
) -> None:
    """Loga falha classificada do provider."""
    logger.warning(
        "provider_call_failed",
        extra={
            "provider": failure.provider,
            "operation": operation,
            "method": method,
            "endpoint": endpoint,
            "failure_kind": failure.kind.value,
            "provider_status": failure.status_code,
            "provider_code": failure.provider_code,
        },
    )


def log_success(
    provider: str,
    operation: str,
    method: str,
    endpoint: str,
    status_code: int,
) -> None:
    logger.debug(
        "provider_call_succeeded",
        extra={
            "provider": provider,
            "operation": operation,
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
        },
    )
