"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (provisionamento, health, índice)
- Delegação para app/services
- Respostas HTTP com headers de correlação e cache

Estrutura:
- routes/provision/: Notion e Airtable
- routes/health/: health checks e readiness
- routes/index.py: GET / e GET /api
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
