"""Entrypoint do serviço de provisionamento de schema de sessões de chat.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080

Ordem do pipeline (de fora para dentro):
    CORS → contexto (request id) → guardas (content type, tamanho,
    screening) → rate limit geral → rotas
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import RateLimitMiddleware, RequestContextMiddleware, RequestGuardMiddleware
from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import close_provider_clients
from app.bootstrap.dependencies import create_rate_limiter
from config.logging import get_logger
from config.settings import get_base_settings, get_rate_limit_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.protocols.rate_limiter import RateLimiterProtocol

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


async def _sweep_periodically(limiter: RateLimiterProtocol, interval_seconds: int) -> None:
    """Remove janelas expiradas do rate limiter até ser cancelada."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await limiter.sweep()
        except Exception as exc:
            logger.warning("rate_limit_sweep_failed", extra={"error_type": type(exc).__name__})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (tokens obrigatórios)
    - Agenda a limpeza periódica do rate limiter

    Shutdown:
    - Cancela a limpeza
    - Fecha clientes HTTP e backend do rate limiter
    """
    base = get_base_settings()
    logger.info("app_starting", extra={"environment": base.environment})
    validate_runtime_settings()

    limiter: RateLimiterProtocol = app.state.rate_limiter
    sweep_task = asyncio.create_task(
        _sweep_periodically(limiter, get_rate_limit_settings().sweep_interval_seconds)
    )

    yield

    logger.info("app_shutting_down")
    sweep_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweep_task
    await close_provider_clients()
    await limiter.close()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    base = get_base_settings()
    fastapi_app = FastAPI(
        title="Chat Session Provisioner",
        description="Provisionamento de schema de sessões de chat no Notion e no Airtable",
        version=base.api_version,
        lifespan=lifespan,
        docs_url=None if base.is_production else "/docs",
        redoc_url=None,
        openapi_url=None if base.is_production else "/openapi.json",
    )

    fastapi_app.state.rate_limiter = create_rate_limiter()
    register_exception_handlers(fastapi_app)

    # add_middleware empilha: o último adicionado é o mais externo
    fastapi_app.add_middleware(RateLimitMiddleware, settings=get_rate_limit_settings())
    fastapi_app.add_middleware(RequestGuardMiddleware, max_body_bytes=base.max_request_bytes)
    fastapi_app.add_middleware(RequestContextMiddleware)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(base.allowed_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Database-ID", "X-Base-ID", "X-Warnings", "Retry-After"],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"environment": base.environment})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("app_starting_dev_server")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
