from datetime import timedelta

import pydantic
import pytest

from core.config import Settings, get_settings
from services.validation_service import validate_complete


def _set_valid_env(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("DATABASE__URL", "postgresql://db.internal:5432/identity")
    monkeypatch.setenv("DATABASE__USERNAME", "identity")
    monkeypatch.setenv("DATABASE__PASSWORD", "s3cret-pass")
    monkeypatch.setenv("DATABASE__MAX_POOL_SIZE", "20")
    monkeypatch.setenv("JWT__SECRET", "k" * 48)
    monkeypatch.setenv("JWT__EXPIRATION_TIME", "900")
    monkeypatch.setenv("JWT__ISSUER", "identity-service")
    monkeypatch.setenv("JWT__SIGNING_ALGORITHM", "HS512")
    monkeypatch.setenv("SECURITY__PASSWORD_POLICY__MIN_LENGTH", "12")
    monkeypatch.setenv("SECURITY__SESSION__SESSION_TIMEOUT", "PT30M")
    monkeypatch.setenv("SECURITY__CORS__ALLOWED_ORIGINS", '["https://app.example.com"]')
    monkeypatch.setenv("APPLICATION__SERVER__PORT", "8443")
    monkeypatch.setenv("APPLICATION__SERVER__HOST", "0.0.0.0")


@pytest.mark.unit
def test_settings_decode_nested_sections(monkeypatch):
    _set_valid_env(monkeypatch)

    configuration = Settings().to_configuration()

    assert configuration.environment == "staging"
    assert configuration.database.max_pool_size == 20
    assert configuration.jwt.signing_algorithm == "HS512"
    assert configuration.security.session.session_timeout == timedelta(minutes=30)
    assert configuration.security.cors.allowed_origins == {"https://app.example.com"}
    assert configuration.application.server.port == 8443
    assert validate_complete(configuration) is True


@pytest.mark.unit
def test_environment_tag_falls_back_to_top_level(monkeypatch):
    _set_valid_env(monkeypatch)

    configuration = Settings().to_configuration()

    assert configuration.security.environment == "staging"
    assert configuration.application.environment == "staging"
    assert configuration.application.name == "Identity Service"


@pytest.mark.unit
def test_explicit_section_environment_is_kept(monkeypatch):
    _set_valid_env(monkeypatch)
    monkeypatch.setenv("SECURITY__ENVIRONMENT", "production")

    configuration = Settings().to_configuration()

    assert configuration.security.environment == "production"


@pytest.mark.unit
def test_decoding_does_not_judge_policy(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("JWT__SECRET", "short")
    monkeypatch.setenv("SECURITY__CORS__ALLOWED_ORIGINS", '["*"]')

    configuration = Settings().to_configuration()

    assert configuration.jwt.secret == "short"
    assert configuration.security.cors.allowed_origins == {"*"}
    assert validate_complete(configuration) is False


@pytest.mark.unit
def test_empty_environment_yields_unpopulated_sections():
    configuration = Settings().to_configuration()

    assert configuration.database.url is None
    assert configuration.jwt.secret is None
    assert validate_complete(configuration) is False


@pytest.mark.unit
def test_unknown_environment_tag_is_rejected(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "qa")

    with pytest.raises(pydantic.ValidationError):
        Settings()


@pytest.mark.unit
def test_each_call_builds_a_fresh_configuration(monkeypatch):
    _set_valid_env(monkeypatch)
    settings = Settings()

    first = settings.to_configuration()
    first.jwt.secret = "changed"

    assert settings.to_configuration().jwt.secret == "k" * 48


@pytest.mark.unit
def test_get_settings_cached():
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
