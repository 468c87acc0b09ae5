"""Endpoints de provisionamento Notion.

Endpoints:
- POST /api/provision/notion: cria a database de sessões de chat
- GET /api/provision/notion/test: verifica o token configurado

O limitador de provisionamento roda antes da validação do body.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.errors import REQUEST_ID_HEADER, utc_timestamp
from api.middleware import enforce_provisioning_rate_limit
from api.validators import ProvisionNotionRequest, sanitized
from app.bootstrap.dependencies import get_notion_service
from app.observability import record_provisioning
from app.services import NotionDatabaseService
from config.logging import mask_identifier
from utils.errors import ApiError

logger = logging.getLogger(__name__)

router = APIRouter()

NO_STORE = "no-cache, no-store, must-revalidate"

NotionService = Annotated[NotionDatabaseService, Depends(get_notion_service)]


@router.post("", dependencies=[Depends(enforce_provisioning_rate_limit)])
async def provision_notion(
    body: ProvisionNotionRequest,
    request: Request,
    service: NotionService,
) -> JSONResponse:
    """Cria a database e devolve {url, id, properties, views}."""
    request_id: str = request.state.request_id
    payload = sanitized(body)

    logger.info(
        "notion_provision_requested",
        extra={
            "parent_page_id": mask_identifier(payload.parent_page_id, 8),
            "platform": payload.config.platform,
            "priority_count": len(payload.config.priorities),
            "feature_count": len(payload.config.features),
        },
    )

    try:
        result = await service.provision(payload.parent_page_id, payload.config)
    except ApiError as exc:
        record_provisioning("notion", exc.code)
        exc.append_request_id(request_id)
        raise

    record_provisioning("notion", "success")
    return JSONResponse(
        content={
            "url": result.url,
            "id": result.id,
            "properties": result.properties,
            "views": result.views,
        },
        headers={
            REQUEST_ID_HEADER: request_id,
            "X-Database-ID": result.id,
            "Cache-Control": NO_STORE,
        },
    )


@router.get("/test")
async def test_notion_connection(request: Request, service: NotionService) -> dict[str, object]:
    connected = await service.test_connection()
    return {
        "connected": connected,
        "timestamp": utc_timestamp(),
        "requestId": request.state.request_id,
    }
