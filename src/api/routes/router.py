"""Agregador de rotas — registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.index import router as index_router
from api.routes.provision import router as provision_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks na raiz (/health, /health/ready, /health/live)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(index_router, tags=["index"])

    api_router.include_router(provision_router, prefix="/api/provision")

    return api_router
