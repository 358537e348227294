# IMPORTANT:
# 1) Settings are read from the environment; keep a local .env from leaking into tests.
# 2) Every test builds its own configuration; nothing here is shared mutable state.

from collections.abc import AsyncGenerator

from httpx import ASGITransport, AsyncClient
import pytest

from app import create_app
from core.config import Settings, get_settings
from core.config_models import CompleteConfiguration
from tests.factories.configs import make_complete_configuration


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Drop cached settings and point the env file somewhere empty."""
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def valid_configuration() -> CompleteConfiguration:
    return make_complete_configuration()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(check_db_on_start=False)


@pytest.fixture
def app(valid_configuration, test_settings):
    """FastAPI application built around a valid configuration."""
    return create_app(valid_configuration, test_settings)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """
    Lightweight HTTP client without lifespan management.
    Startup behaviour is exercised separately with LifespanManager.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="https://testserver.local") as ac:
        yield ac
