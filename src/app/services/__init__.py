"""Serviços de aplicação.

Orquestração de provisionamento sobre os protocolos de cliente;
o IO concreto fica em api/connectors/.
"""

from app.services.airtable_base import AirtableBaseService
from app.services.notion_database import NotionDatabaseService

__all__ = [
    "AirtableBaseService",
    "NotionDatabaseService",
]
