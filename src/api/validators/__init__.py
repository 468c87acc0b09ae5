"""Validação e sanitização de entrada das rotas HTTP."""

from api.validators.provisioning import (
    AIRTABLE_BASE_ID_MESSAGE,
    AIRTABLE_BASE_ID_PATTERN,
    NOTION_PAGE_ID_PATTERN,
    ConfigRequest,
    ProvisionAirtableRequest,
    ProvisionNotionRequest,
    sanitized,
)
from api.validators.security import (
    SUSPICIOUS_PATTERNS,
    find_suspicious_pattern,
    sanitize_string,
    sanitize_value,
)

__all__ = [
    "AIRTABLE_BASE_ID_MESSAGE",
    "AIRTABLE_BASE_ID_PATTERN",
    "NOTION_PAGE_ID_PATTERN",
    "SUSPICIOUS_PATTERNS",
    "ConfigRequest",
    "ProvisionAirtableRequest",
    "ProvisionNotionRequest",
    "find_suspicious_pattern",
    "sanitize_string",
    "sanitize_value",
    "sanitized",
]
