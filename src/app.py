from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from api.handlers.exceptions import register_exception_handlers
from api.middleware.rate_limit import register_rate_limit_middleware
from api.middleware.request_id import register_request_id_middleware
from api.routes.system import build_system_router
from api.routes.v1 import router as v1_router
from core.config import Settings, get_settings
from core.config_models import CompleteConfiguration, CorsConfig
from core.logging import setup_logging
from db.database import check_db_connection, close_db_connections, init_engine
from services import validation_service

logger = logging.getLogger(__name__)


def _register_cors(app: FastAPI, cors: CorsConfig | None) -> None:
    if cors is None or not cors.allowed_origins:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(cors.allowed_origins),
        allow_methods=sorted(cors.allowed_methods) or ["GET"],
        allow_headers=["*"],
        allow_credentials=False,
        max_age=int(cors.max_age.total_seconds()) if cors.max_age else 600,
    )


def create_app(configuration: CompleteConfiguration | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the service app around ``configuration``.

    When no configuration is passed it is assembled from the environment.
    The lifespan refuses to start unless the configuration validates.
    """
    settings = settings or get_settings()
    if configuration is None:
        configuration = settings.to_configuration()

    application = configuration.application
    setup_logging(application.logging if application else None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting up %s", settings.api_title)

        try:
            validation_service.ensure_valid(configuration)
            logger.info("Configuration accepted for environment=%s", configuration.environment)

            if settings.check_db_on_start:
                init_engine(configuration.database)
                if await check_db_connection():
                    logger.info("Database connection verified")
                else:
                    raise RuntimeError("Database connection failed")
            else:
                logger.debug("Skipping DB connection check on startup (CHECK_DB_ON_START=false)")

            logger.info("Application startup completed")

        except Exception as e:
            logger.error("Application startup failed: %s", e)
            raise

        yield

        logger.info("Shutting down %s", settings.api_title)
        await close_db_connections()
        logger.info("Application shutdown completed")

    production = configuration.environment == "production"
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
        openapi_url=None if production else "/openapi.json",
    )
    app.state.configuration = configuration

    # Routers
    health_check = application.health_check if application else None
    app.include_router(v1_router)
    app.include_router(
        build_system_router(
            health_check.endpoint if health_check else None,
            health_enabled=health_check.enabled if health_check else True,
        )
    )

    # Middlewares
    security = configuration.security
    _register_cors(app, security.cors if security else None)
    register_request_id_middleware(app)
    register_rate_limit_middleware(app, security.rate_limit if security else None)

    # Exception handlers
    register_exception_handlers(app)

    return app
