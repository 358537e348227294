from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

# Every field is optional and unconstrained: these models only carry data.
# Judging the values is the job of services.validators.
_CARRIER_CONFIG = ConfigDict(extra="ignore", validate_assignment=True)


class DatabaseConfig(BaseModel):
    """Database connection and pool configuration."""

    model_config = _CARRIER_CONFIG

    url: str | None = Field(default=None, description="Connection URL, e.g. postgresql://host:5432/identity")
    username: str | None = Field(default=None, description="Database user")
    password: str | None = Field(default=None, description="Database password")
    driver_class_name: str | None = Field(default=None, description="Optional explicit driver name")
    max_pool_size: int | None = Field(default=None, description="Upper bound of the connection pool")
    min_pool_size: int | None = Field(default=None, description="Connections kept open when idle")
    connection_timeout: timedelta | None = Field(default=None, description="Wait limit for a pooled connection")
    enable_migrations: bool = Field(default=False)
    migration_location: str | None = Field(default=None)


class JwtConfig(BaseModel):
    """Token issuance parameters."""

    model_config = _CARRIER_CONFIG

    secret: str | None = Field(default=None, description="Signing secret")
    expiration_time: int | None = Field(default=None, description="Access token lifetime in seconds")
    issuer: str | None = Field(default=None, description="Value of the iss claim")
    signing_algorithm: str | None = Field(default=None, description="JWS algorithm name, e.g. HS256")
    refresh_token_enabled: bool = Field(default=False)
    refresh_token_expiration: int | None = Field(default=None, description="Refresh token lifetime in seconds")


class PasswordPolicy(BaseModel):
    model_config = _CARRIER_CONFIG

    min_length: int | None = None
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_digits: bool = False
    require_special_chars: bool = False


class SessionConfig(BaseModel):
    model_config = _CARRIER_CONFIG

    max_sessions: int | None = Field(default=None, description="Concurrent sessions per user")
    session_timeout: timedelta | None = Field(default=None, description="Idle lifetime of a session")


class CorsConfig(BaseModel):
    model_config = _CARRIER_CONFIG

    allowed_origins: set[str] = Field(default_factory=set)
    allowed_methods: set[str] = Field(default_factory=set)
    max_age: timedelta | None = None


class RateLimitConfig(BaseModel):
    model_config = _CARRIER_CONFIG

    enabled: bool = False
    requests_per_minute: int | None = None
    burst_capacity: int | None = None


class SecurityConfig(BaseModel):
    """Password, session, CORS and rate limiting policy."""

    model_config = _CARRIER_CONFIG

    environment: str | None = Field(default=None, description="Deployment tag the policy applies to")
    password_policy: PasswordPolicy | None = None
    session: SessionConfig | None = None
    cors: CorsConfig | None = None
    rate_limit: RateLimitConfig | None = None


class ServerConfig(BaseModel):
    """Server runtime configuration."""

    model_config = _CARRIER_CONFIG

    port: int | None = Field(default=None, description="Listen port")
    host: str | None = Field(default=None, description="Bind address")
    max_threads: int | None = Field(default=None, description="Worker thread ceiling")


class LoggingConfig(BaseModel):
    """Application log output configuration."""

    model_config = _CARRIER_CONFIG

    level: str | None = Field(default=None, description="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    file: str | None = Field(default=None, description="Log file path")
    max_file_size: str | None = Field(default=None, description="Rotation threshold, e.g. 10MB")
    max_history: int | None = Field(default=None, description="Rotated files to keep")


class HealthCheckConfig(BaseModel):
    model_config = _CARRIER_CONFIG

    enabled: bool = False
    endpoint: str | None = None
    timeout: timedelta | None = None


class ApplicationConfig(BaseModel):
    """Service identity plus server, logging and health check sections."""

    model_config = _CARRIER_CONFIG

    name: str | None = None
    version: str | None = None
    environment: str | None = None
    server: ServerConfig | None = None
    logging: LoggingConfig | None = None
    health_check: HealthCheckConfig | None = None


class CompleteConfiguration(BaseModel):
    """One configuration of every domain, as assembled at service boot.

    Attributes:
        environment (str | None): Deployment tag: dev, test, staging or production.
        database (DatabaseConfig | None): Connection settings.
        jwt (JwtConfig | None): Token issuance settings.
        security (SecurityConfig | None): Security policy.
        application (ApplicationConfig | None): Service and server settings.
        custom_properties (dict[str, str]): Free-form extension properties.
    """

    model_config = _CARRIER_CONFIG

    environment: str | None = None
    database: DatabaseConfig | None = None
    jwt: JwtConfig | None = None
    security: SecurityConfig | None = None
    application: ApplicationConfig | None = None
    custom_properties: dict[str, str] = Field(default_factory=dict)


__all__ = [
    "ApplicationConfig",
    "CompleteConfiguration",
    "CorsConfig",
    "DatabaseConfig",
    "HealthCheckConfig",
    "JwtConfig",
    "LoggingConfig",
    "PasswordPolicy",
    "RateLimitConfig",
    "SecurityConfig",
    "ServerConfig",
    "SessionConfig",
]
