"""Checks over a parsed Docker Compose descriptor's postgres service.

``parse_compose_file`` is the only function that touches YAML; the predicates
operate on the already-parsed mapping.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from core.config_models import DatabaseConfig
from core.exceptions import ComposeFileError

logger = logging.getLogger(__name__)

POSTGRES_SERVICE = "postgres"
POSTGRES_PORT = "5432"
OFFICIAL_IMAGE_PREFIX = "postgres:"
REQUIRED_POSTGRES_ENV = ("POSTGRES_DB", "POSTGRES_PASSWORD", "POSTGRES_USER")
WEAK_PASSWORDS = frozenset({"password", "postgres", "secret", "admin", "123456", "changeme"})


def parse_compose_file(content: str) -> dict[str, Any] | None:
    """Parse Compose YAML. Empty or comment-only input yields None.

    Raises:
        ComposeFileError: the text is not valid YAML or not a mapping.
    """
    try:
        compose = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.error("Malformed compose file: %s", e)
        raise ComposeFileError(message="Malformed compose file") from e
    if compose is not None and not isinstance(compose, dict):
        raise ComposeFileError(message="Compose file must be a mapping")
    return compose


def _postgres_service(compose: dict[str, Any] | None) -> dict[str, Any] | None:
    if not compose:
        return None
    services = compose.get("services")
    if not isinstance(services, dict):
        return None
    service = services.get(POSTGRES_SERVICE)
    return service if isinstance(service, dict) else None


def postgres_environment(compose: dict[str, Any] | None) -> dict[str, str]:
    """Return the postgres service environment as a mapping.

    Both the list form (``- KEY=value``) and the mapping form are accepted.
    """
    service = _postgres_service(compose)
    if service is None:
        return {}
    env = service.get("environment")
    if isinstance(env, dict):
        return {str(k): "" if v is None else str(v) for k, v in env.items()}
    if isinstance(env, list):
        pairs: dict[str, str] = {}
        for item in env:
            key, _, value = str(item).partition("=")
            pairs[key] = value
        return pairs
    return {}


def has_required_postgres_environment(compose: dict[str, Any] | None) -> bool:
    env = postgres_environment(compose)
    return all(key in env for key in REQUIRED_POSTGRES_ENV)


def has_valid_postgres_ports(compose: dict[str, Any] | None) -> bool:
    service = _postgres_service(compose)
    if service is None:
        return False
    ports = service.get("ports")
    if not isinstance(ports, list):
        return False
    return any(POSTGRES_PORT in str(port) for port in ports)


def uses_official_postgres_image(compose: dict[str, Any] | None) -> bool:
    service = _postgres_service(compose)
    if service is None:
        return False
    image = service.get("image")
    return isinstance(image, str) and image.startswith(OFFICIAL_IMAGE_PREFIX)


def has_weak_postgres_password(compose: dict[str, Any] | None) -> bool:
    """True when the password is missing, empty or a well-known default."""
    password = postgres_environment(compose).get("POSTGRES_PASSWORD")
    return not password or password.lower() in WEAK_PASSWORDS


def _published_port(compose: dict[str, Any] | None) -> str:
    service = _postgres_service(compose) or {}
    for port in service.get("ports") or []:
        host, _, container = str(port).rpartition(":")
        if container == POSTGRES_PORT and host:
            # "127.0.0.1:5433:5432" publishes on 5433
            return host.rpartition(":")[2]
    return POSTGRES_PORT


def database_config_from_compose(
    compose: dict[str, Any] | None,
    host: str = "localhost",
    max_pool_size: int = 10,
) -> DatabaseConfig:
    """Derive the DatabaseConfig a service would use against the compose postgres."""
    env = postgres_environment(compose)
    db_name = env.get("POSTGRES_DB")
    url = f"postgresql://{host}:{_published_port(compose)}/{db_name}" if db_name else None
    return DatabaseConfig(
        url=url,
        username=env.get("POSTGRES_USER"),
        password=env.get("POSTGRES_PASSWORD"),
        max_pool_size=max_pool_size,
        min_pool_size=1,
    )
