"""Configuração centralizada de logging.

Funções para configurar logging estruturado JSON com:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Formatação padronizada
- Eventos de segurança e de requisição HTTP com campos fixos

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="chat-session-provisioner")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("notion_database_created", extra={"database_id": "..."})

Logs estruturados, sem tokens nem payloads brutos.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "chat-session-provisioner"

SECURITY_LOGGER_NAME = "security"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    environment: str | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o request id
            do contexto atual (ex: de ContextVar).
        environment: Ambiente incluído em cada registro.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter, environment))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    # uvicorn.access duplica o log de requisição do middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service e correlation_id.
    """
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log observável de fallback usado (sem PII).

    Útil para registrar quando um fallback determinístico
    foi acionado (ex: URL ausente na resposta do provider).

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "notion_database_url").
        reason: Razão do fallback (ex: "missing_url").
        elapsed_ms: Tempo decorrido em ms (quando aplicável).
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info("fallback_applied", extra=extra)


def log_http_request(
    logger: logging.Logger,
    *,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    client_ip: str | None = None,
    user_agent: str | None = None,
) -> None:
    """Registra uma requisição HTTP concluída.

    Nível acompanha o status: 5xx ERROR, 4xx WARNING, demais INFO.
    """
    if status_code >= 500:
        level = logging.ERROR
    elif status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger.log(
        level,
        "http_request",
        extra={
            "method": method,
            "endpoint": path,
            "status": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
            "user_agent": user_agent,
        },
    )


def log_security_event(
    event: str,
    *,
    client_ip: str | None = None,
    path: str | None = None,
    **details: Any,
) -> None:
    """Registra evento de segurança (screening, rate limit, tamanho).

    Vai para o logger "security" em WARNING para ser filtrável
    separadamente dos logs de aplicação.

    Args:
        event: Nome do evento (ex: "suspicious_request_blocked").
        client_ip: IP de origem da requisição.
        path: Caminho requisitado.
        **details: Campos adicionais sem PII.
    """
    extra: dict[str, Any] = {
        "security_event": event,
        "client_ip": client_ip,
        "endpoint": path,
    }
    extra.update(details)
    logging.getLogger(SECURITY_LOGGER_NAME).warning("security_event", extra=extra)
