"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="chat-session-provisioner")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("airtable_base_validated", extra={"table": "Chat Sessions"})

Campos obrigatórios em todo log:
- correlation_id (request id)
- service
- level
- logger
- message
- asctime
"""

from config.logging.config import (
    DEFAULT_SERVICE_NAME,
    configure_logging,
    get_logger,
    log_fallback,
    log_http_request,
    log_security_event,
)
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)
from config.logging.redaction import REDACTED, mask_identifier, redact_payload

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FIELD_RENAME_MAP",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    # Filters
    "CorrelationIdFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "log_http_request",
    "log_security_event",
    "mask_identifier",
    "redact_payload",
]
