from datetime import timedelta

import pytest

from core.config_models import DatabaseConfig
from db import database


@pytest.mark.unit
def test_build_async_url_switches_to_async_driver_and_applies_credentials():
    config = DatabaseConfig(url="postgresql://db.internal:5432/identity", username="svc", password="p@ss")

    url = database.build_async_url(config)

    assert url.drivername == "postgresql+asyncpg"
    assert url.username == "svc"
    assert url.password == "p@ss"
    assert url.host == "db.internal"
    assert url.database == "identity"


@pytest.mark.unit
def test_build_async_url_replaces_sync_driver():
    url = database.build_async_url(DatabaseConfig(url="postgresql+psycopg2://localhost/identity"))
    assert url.drivername == "postgresql+asyncpg"


@pytest.mark.unit
def test_build_async_url_requires_url():
    with pytest.raises(ValueError):
        database.build_async_url(DatabaseConfig())


@pytest.mark.unit
def test_pool_bounds_come_from_config():
    config = DatabaseConfig(
        url="postgresql://localhost/identity",
        username="svc",
        password="secret",
        max_pool_size=25,
        min_pool_size=5,
        connection_timeout=timedelta(seconds=12),
    )

    engine = database.create_engine_from_config(config)

    assert engine.pool.size() == 5
    assert engine.pool._max_overflow == 20
    assert engine.pool._timeout == 12


@pytest.mark.unit
async def test_check_db_connection_with_sqlite():
    database.init_engine(DatabaseConfig(url="sqlite:///:memory:"))
    try:
        assert await database.check_db_connection() is True
    finally:
        await database.close_db_connections()


@pytest.mark.unit
def test_get_engine_before_init_raises():
    with pytest.raises(RuntimeError):
        database.get_engine()


@pytest.mark.unit
async def test_check_db_connection_reports_failure(monkeypatch):
    class _BrokenEngine:
        def begin(self):
            raise ConnectionError("refused")

    monkeypatch.setattr(database, "engine", _BrokenEngine())

    assert await database.check_db_connection() is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "jdbc_url, drivername, database_name",
    [
        ("jdbc:mysql://localhost:3306/identity_db", "mysql+aiomysql", "identity_db"),
        ("jdbc:postgresql://localhost:5432/identity_db", "postgresql+asyncpg", "identity_db"),
    ],
)
def test_build_async_url_translates_jdbc(jdbc_url, drivername, database_name):
    url = database.build_async_url(DatabaseConfig(url=jdbc_url, username="admin", password="password123"))

    assert url.drivername == drivername
    assert url.host == "localhost"
    assert url.database == database_name
    assert url.username == "admin"


@pytest.mark.unit
@pytest.mark.parametrize("jdbc_url", ["jdbc:h2:mem:testdb", "jdbc:oracle:thin:@localhost:1521:xe"])
def test_build_async_url_rejects_jdbc_without_async_driver(jdbc_url):
    with pytest.raises(ValueError):
        database.build_async_url(DatabaseConfig(url=jdbc_url))


@pytest.mark.unit
async def test_supplied_engine_takes_precedence(monkeypatch):
    database.init_engine(DatabaseConfig(url="sqlite:///:memory:"))
    sentinel = object()
    monkeypatch.setattr(database, "engine", sentinel)
    try:
        assert database.get_engine() is sentinel
    finally:
        monkeypatch.setattr(database, "engine", None)
        await database.close_db_connections()
