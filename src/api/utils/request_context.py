from fastapi import Request

from core.config_models import CompleteConfiguration
from core.exceptions import MissingConfigurationError


def get_configuration(request: Request) -> CompleteConfiguration:
    """Return the configuration the running app was started with."""
    configuration = getattr(request.app.state, "configuration", None)
    if configuration is None:
        raise MissingConfigurationError(message="Configuration cannot be null")
    return configuration


def client_ip(request: Request) -> str:
    """
    Extract the client IP from request.
    Priority:
      1) X-Forwarded-For (first IP)
      2) X-Real-IP
      3) request.client.host
    """
    xff = request.headers.get("x-forwarded-for")
    ip: str | None = None
    if xff:
        parts = [p.strip() for p in xff.split(",") if p.strip()]
        if parts:
            ip = parts[0]
    if not ip:
        ip = request.headers.get("x-real-ip")
    if not ip and request.client:
        ip = request.client.host
    return ip or "unknown"
