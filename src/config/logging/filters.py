"""Filters de logging para injeção de contexto.

Campos injetados:
- correlation_id: request id da requisição HTTP em andamento
- service: Nome do serviço (ex: chat-session-provisioner)
- environment: Ambiente de execução, quando informado
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Se correlation_id já foi passado via `extra` o valor é preservado.
    Nunca adicionar tokens de provider ou payloads brutos nos logs.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        environment: str | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._environment = environment
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        if self._environment and not hasattr(record, "environment"):
            record.environment = self._environment
        return True
