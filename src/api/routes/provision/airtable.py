"""Endpoints de provisionamento Airtable.

Endpoints:
- POST /api/provision/airtable: valida a base (e opcionalmente semeia)
- GET /api/provision/airtable/test/{baseId}: conectividade com a base
- GET /api/provision/airtable/info/{baseId}: resumo da base

A API do Airtable não cria tabelas nem campos: o POST valida a tabela
"Chat Sessions" criada pelo usuário e devolve avisos.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse

from api.errors import REQUEST_ID_HEADER, utc_timestamp
from api.middleware import enforce_provisioning_rate_limit
from api.validators import AIRTABLE_BASE_ID_PATTERN, ProvisionAirtableRequest, sanitized
from app.bootstrap.dependencies import get_airtable_service
from app.observability import record_provisioning
from app.services import AirtableBaseService
from config.logging import mask_identifier
from utils.errors import ApiError

logger = logging.getLogger(__name__)

router = APIRouter()

NO_STORE = "no-cache, no-store, must-revalidate"
INFO_CACHE = "private, max-age=300"

AirtableService = Annotated[AirtableBaseService, Depends(get_airtable_service)]
BaseIdPath = Annotated[str, Path(alias="baseId", pattern=AIRTABLE_BASE_ID_PATTERN)]


@router.post("", dependencies=[Depends(enforce_provisioning_rate_limit)])
async def provision_airtable(
    body: ProvisionAirtableRequest,
    request: Request,
    service: AirtableService,
) -> JSONResponse:
    """Valida a base e devolve {url, table, sampleRecordId?, fields, recordCount, warnings}."""
    request_id: str = request.state.request_id
    payload = sanitized(body)

    logger.info(
        "airtable_provision_requested",
        extra={
            "base_id": mask_identifier(payload.base_id),
            "seed_sample": payload.seed_sample,
            "has_config": payload.config is not None,
        },
    )

    try:
        result = await service.provision(payload.base_id, payload.config, payload.seed_sample)
    except ApiError as exc:
        record_provisioning("airtable", exc.code)
        exc.append_request_id(request_id)
        raise

    record_provisioning("airtable", "success", warnings=len(result.warnings))
    headers = {
        REQUEST_ID_HEADER: request_id,
        "X-Base-ID": payload.base_id,
        "Cache-Control": NO_STORE,
    }
    if result.warnings:
        headers["X-Warnings"] = "; ".join(result.warnings)
    return JSONResponse(content=result.as_response(), headers=headers)


@router.get("/test/{baseId}")
async def test_airtable_connection(
    base_id: BaseIdPath,
    request: Request,
    service: AirtableService,
) -> dict[str, object]:
    connected = await service.test_connection(base_id)
    return {
        "connected": connected,
        "baseId": base_id,
        "timestamp": utc_timestamp(),
        "requestId": request.state.request_id,
    }


@router.get("/info/{baseId}")
async def airtable_base_info(
    base_id: BaseIdPath,
    request: Request,
    service: AirtableService,
) -> JSONResponse:
    try:
        info = await service.get_base_info(base_id)
    except ApiError as exc:
        exc.append_request_id(request.state.request_id)
        raise
    return JSONResponse(content=info, headers={"Cache-Control": INFO_CACHE})
