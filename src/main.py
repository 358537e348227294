import uvicorn

from app import create_app
from core.config import get_settings

settings = get_settings()
configuration = settings.to_configuration()
app = create_app(configuration, settings)


if __name__ == "__main__":
    server = configuration.application.server if configuration.application else None
    log_config = configuration.application.logging if configuration.application else None
    uvicorn.run(
        "main:app",
        host=server.host if server and server.host else "0.0.0.0",
        port=server.port if server and server.port else 8000,
        log_level=(log_config.level if log_config and log_config.level else "info").lower(),
        access_log=settings.environment in ("dev", "development"),
    )
