"""Connector da API do Airtable."""

from api.connectors.airtable.client import (
    CANDIDATE_TABLE_NAMES,
    CHAT_SESSIONS_TABLE,
    AirtableClient,
)
from api.connectors.airtable.errors import parse_airtable_error

__all__ = [
    "CANDIDATE_TABLE_NAMES",
    "CHAT_SESSIONS_TABLE",
    "AirtableClient",
    "parse_airtable_error",
]
