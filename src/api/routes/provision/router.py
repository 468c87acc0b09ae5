"""Router de provisionamento — agrega Notion e Airtable sob /api/provision."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.provision.airtable import router as airtable_router
from api.routes.provision.notion import router as notion_router

router = APIRouter()

router.include_router(notion_router, prefix="/notion", tags=["notion"])
router.include_router(airtable_router, prefix="/airtable", tags=["airtable"])
