from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

from core.config_models import DatabaseConfig

logger = logging.getLogger(__name__)

Base = declarative_base()

_ASYNC_DRIVERS = {
    "postgresql": "asyncpg",
    "mysql": "aiomysql",
    "mariadb": "aiomysql",
    "sqlite": "aiosqlite",
}

_JDBC_PREFIX = "jdbc:"
_JDBC_BACKENDS = {"mysql": "mysql", "mariadb": "mariadb", "postgresql": "postgresql"}

# Engines are created lazily, never at import time.
# `engine` is an externally supplied engine that takes precedence over the
# one built by init_engine.
engine: AsyncEngine | None = None
_engine: AsyncEngine | None = None


def _from_jdbc(url: str) -> str:
    """Rewrite ``jdbc:mysql://host/db`` style URLs to their SQLAlchemy form."""
    if not url.startswith(_JDBC_PREFIX):
        return url
    subprotocol, sep, rest = url[len(_JDBC_PREFIX) :].partition(":")
    backend = _JDBC_BACKENDS.get(subprotocol)
    if backend is None or not sep or not rest.startswith("//"):
        raise ValueError(f"JDBC URL for {subprotocol or 'unknown'} cannot be used by this service")
    return f"{backend}:{rest}"


def build_async_url(config: DatabaseConfig) -> URL:
    """Return the async driver URL for ``config`` with credentials applied."""
    if not config.url:
        raise ValueError("Database URL is not configured")
    url = make_url(_from_jdbc(config.url))
    backend = url.get_backend_name()
    driver = _ASYNC_DRIVERS.get(backend)
    if driver is not None:
        url = url.set(drivername=f"{backend}+{driver}")
    if config.username:
        url = url.set(username=config.username)
    if config.password:
        url = url.set(password=config.password)
    return url


def create_engine_from_config(config: DatabaseConfig) -> AsyncEngine:
    url = build_async_url(config)
    if url.get_backend_name() == "sqlite":
        # SQLite uses a static/null pool; pool bounds do not apply
        return create_async_engine(url)

    max_pool = config.max_pool_size or 10
    min_pool = min(config.min_pool_size or 1, max_pool)
    timeout = config.connection_timeout.total_seconds() if config.connection_timeout else 30
    return create_async_engine(
        url,
        pool_size=min_pool,
        max_overflow=max_pool - min_pool,
        pool_timeout=timeout,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def init_engine(config: DatabaseConfig) -> AsyncEngine:
    global _engine
    _engine = create_engine_from_config(config)
    logger.debug("AsyncEngine created")
    return _engine


def get_engine() -> AsyncEngine:
    if engine is not None:
        return engine
    if _engine is None:
        raise RuntimeError("Database engine not initialized")
    return _engine


async def check_db_connection() -> bool:
    try:
        async with get_engine().begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection is healthy")
        return True
    except Exception as e:
        logger.error("Database connection check failed: %s", e)
        return False


async def close_db_connections() -> None:
    global engine, _engine
    try:
        if _engine is not None:
            await _engine.dispose()
            logger.info("Database connections closed")
    finally:
        engine = None
        _engine = None
