"""Connector da API do Notion."""

from api.connectors.notion.client import NotionClient
from api.connectors.notion.errors import parse_notion_error

__all__ = ["NotionClient", "parse_notion_error"]
