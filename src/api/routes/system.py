from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Request

from api.utils.request_context import get_configuration
from services import validation_service

DEFAULT_HEALTH_ENDPOINT = "/health"


def build_system_router(health_endpoint: str | None = None, health_enabled: bool = True) -> APIRouter:
    """Root and health routes; the health path comes from HealthCheckConfig.endpoint."""
    router = APIRouter(tags=["System"])

    async def health(request: Request) -> dict[str, Any]:
        valid = validation_service.validate_complete(get_configuration(request))
        return {
            "success": valid,
            "status": "ok" if valid else "degraded",
            "configuration_valid": valid,
            "timestamp": datetime.utcnow().isoformat(),
        }

    if health_enabled:
        router.add_api_route(health_endpoint or DEFAULT_HEALTH_ENDPOINT, health, methods=["GET"], tags=["Health"])

    @router.get("/", tags=["Root"])
    async def root(request: Request) -> dict[str, Any]:
        application = get_configuration(request).application
        return {
            "success": True,
            "name": application.name if application else None,
            "version": application.version if application else None,
            "health": (health_endpoint or DEFAULT_HEALTH_ENDPOINT) if health_enabled else None,
            "timestamp": datetime.utcnow().isoformat(),
        }

    return router
