"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging
import os

from app.observability import get_correlation_id
from config.logging import DEFAULT_SERVICE_NAME, configure_logging
from config.settings import (
    get_airtable_settings,
    get_base_settings,
    get_notion_settings,
    get_rate_limit_settings,
)

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado JSON com request id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=base.service_name or DEFAULT_SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        environment=base.environment,
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings, prefixados pelo domínio."""
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"rate_limit: {error}" for error in get_rate_limit_settings().validate(base))
    errors.extend(f"notion: {error}" for error in get_notion_settings().validate())
    errors.extend(f"airtable: {error}" for error in get_airtable_settings().validate())
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Tokens de provider são obrigatórios em qualquer ambiente: sem eles
    nenhuma rota de provisionamento funciona.

    Raises:
        RuntimeError: Se houver qualquer erro de configuração.
    """
    environment = get_base_settings().environment
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.error(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    details = "\n".join(f"- {error}" for error in errors)
    raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
