"""Rotas de provisionamento (Notion e Airtable)."""

from api.routes.provision.router import router

__all__ = ["router"]
