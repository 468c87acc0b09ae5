"""Formatters de logging estruturado.

Todo registro sai como um objeto JSON por linha com os campos
obrigatórios abaixo mais o que vier em `extra`.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado (ordem de saída)
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}

ISO_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "timestamp": "2026-02-02T10:30:00+0000",
            "level": "INFO",
            "logger": "app.services.notion_database",
            "message": "notion_database_created",
            "correlation_id": "8d1c...",
            "service": "chat-session-provisioner"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        datefmt=ISO_DATE_FORMAT,
        rename_fields=FIELD_RENAME_MAP,
    )
