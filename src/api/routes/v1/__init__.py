from __future__ import annotations

from fastapi import APIRouter

from api.routes.v1.configuration import router as configuration_router

router = APIRouter(prefix="/api/v1")
router.include_router(configuration_router)
