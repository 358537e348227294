from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config_models import (
    ApplicationConfig,
    CompleteConfiguration,
    DatabaseConfig,
    JwtConfig,
    SecurityConfig,
)


class Settings(BaseSettings):
    """Bootstrap settings decoded from environment variables and ``.env``.

    Nested sections use ``__`` as delimiter, e.g. ``DATABASE__URL``,
    ``JWT__EXPIRATION_TIME`` or ``SECURITY__CORS__ALLOWED_ORIGINS='["*"]'``.
    Decoding only checks types; policy is applied by the validation service.
    """

    # Environment
    environment: str = Field(default="development", pattern="^(dev|development|test|staging|production)$")
    debug: bool = Field(default=False)

    # API
    api_title: str = Field(default="Identity Service")
    api_version: str = Field(default="1.0.0")
    api_description: str = Field(default="Identity and authentication service")

    # Startup
    check_db_on_start: bool = Field(default=False, description="Run DB connection check on startup")

    # Domain sections
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    jwt: JwtConfig = Field(default_factory=JwtConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    application: ApplicationConfig = Field(default_factory=ApplicationConfig)
    custom_properties: dict[str, str] = Field(default_factory=dict)

    # Pydantic v2 settings config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def to_configuration(self) -> CompleteConfiguration:
        """Assemble a fresh CompleteConfiguration from the decoded sections."""
        security = self.security.model_copy(deep=True)
        if security.environment is None:
            security.environment = self.environment

        application = self.application.model_copy(deep=True)
        if application.environment is None:
            application.environment = self.environment
        if application.name is None:
            application.name = self.api_title
        if application.version is None:
            application.version = self.api_version

        return CompleteConfiguration(
            environment=self.environment,
            database=self.database.model_copy(deep=True),
            jwt=self.jwt.model_copy(deep=True),
            security=security,
            application=application,
            custom_properties=dict(self.custom_properties),
        )


@lru_cache
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()
