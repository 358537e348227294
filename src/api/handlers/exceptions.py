from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse

from core.exceptions import ConfigurationRejectedError, IdentityConfigException, map_exception_to_http

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI, Request


def register_exception_handlers(app: FastAPI) -> None:
    """Register application-wide exception handlers."""

    @app.exception_handler(IdentityConfigException)
    async def identity_config_exception_handler(request: Request, exc: IdentityConfigException) -> JSONResponse:  # noqa: D401
        http_exc = map_exception_to_http(exc)
        error: dict[str, object] = {"type": exc.__class__.__name__, "code": exc.code}
        if isinstance(exc, ConfigurationRejectedError):
            error["errors"] = exc.errors
        return JSONResponse(
            status_code=http_exc.status_code,
            content={
                "success": False,
                "message": http_exc.detail,
                "timestamp": datetime.utcnow().isoformat(),
                "error": error,
            },
        )
