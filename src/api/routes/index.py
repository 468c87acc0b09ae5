"""Índice do serviço: GET / e GET /api."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from api.errors import utc_timestamp
from config.settings import get_base_settings

router = APIRouter()

ENDPOINTS: dict[str, str] = {
    "provisionNotion": "POST /api/provision/notion",
    "testNotion": "GET /api/provision/notion/test",
    "provisionAirtable": "POST /api/provision/airtable",
    "testAirtable": "GET /api/provision/airtable/test/{baseId}",
    "airtableInfo": "GET /api/provision/airtable/info/{baseId}",
    "health": "GET /health",
    "ready": "GET /health/ready",
    "live": "GET /health/live",
}


@router.get("/")
async def service_index() -> dict[str, Any]:
    settings = get_base_settings()
    return {
        "service": settings.service_name,
        "version": settings.api_version,
        "environment": settings.environment,
        "documentation": "/api",
        "timestamp": utc_timestamp(),
    }


@router.get("/api")
async def api_index() -> dict[str, Any]:
    """Lista os endpoints públicos."""
    settings = get_base_settings()
    return {
        "service": settings.service_name,
        "version": settings.api_version,
        "endpoints": ENDPOINTS,
        "timestamp": utc_timestamp(),
    }
