"""Per-domain configuration checks.

Each function is a pure predicate over one domain config: it reads only its
argument and keeps no state, so any number of callers may use it at once.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from core.config_models import ApplicationConfig, DatabaseConfig, JwtConfig, SecurityConfig

RECOGNIZED_DATABASE_SCHEMES = frozenset({"postgresql", "mysql", "mariadb", "sqlite", "oracle", "mssql"})
JDBC_PREFIX = "jdbc:"
RECOGNIZED_JDBC_SUBPROTOCOLS = frozenset({"mysql", "mariadb", "postgresql", "h2", "oracle", "sqlserver"})
MAX_POOL_SIZE = 1000

ALLOWED_SIGNING_ALGORITHMS = frozenset({"HS256", "HS384", "HS512", "RS256", "RS384", "RS512"})
MIN_SECRET_LENGTH = 32
MIN_EXPIRATION_SECONDS = 1
MAX_EXPIRATION_SECONDS = 86400

MIN_PASSWORD_LENGTH = 8
PRODUCTION_ENVIRONMENT = "production"
WILDCARD_ORIGIN = "*"

MIN_PORT = 1
MAX_PORT = 65535


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _has_jdbc_subprotocol(url: str) -> bool:
    # jdbc:<subprotocol>:<rest>, e.g. jdbc:h2:mem:testdb
    subprotocol, sep, rest = url[len(JDBC_PREFIX) :].partition(":")
    return bool(sep and rest) and subprotocol in RECOGNIZED_JDBC_SUBPROTOCOLS


def has_recognized_scheme(url: str | None) -> bool:
    """Return True when ``url`` names a supported database backend.

    Both SQLAlchemy URLs (``postgresql+asyncpg://...``) and JDBC URLs
    (``jdbc:mysql://...``) are recognised.
    """
    if _is_blank(url):
        return False
    if url.startswith(JDBC_PREFIX):
        return _has_jdbc_subprotocol(url)
    try:
        parsed = make_url(url)
    except (ArgumentError, ValueError):
        return False
    return parsed.get_backend_name() in RECOGNIZED_DATABASE_SCHEMES


def is_valid_signing_algorithm(algorithm: str | None) -> bool:
    # Exact, case-sensitive membership
    return algorithm is not None and algorithm in ALLOWED_SIGNING_ALGORITHMS


def validate_database_config(config: DatabaseConfig | None) -> bool:
    if config is None:
        return False
    if not has_recognized_scheme(config.url):
        return False
    if _is_blank(config.username) or _is_blank(config.password):
        return False
    pool = config.max_pool_size
    return pool is not None and 0 < pool <= MAX_POOL_SIZE


def validate_jwt_config(config: JwtConfig | None) -> bool:
    if config is None:
        return False
    if _is_blank(config.secret) or len(config.secret) < MIN_SECRET_LENGTH:
        return False
    expiration = config.expiration_time
    if expiration is None or not MIN_EXPIRATION_SECONDS <= expiration <= MAX_EXPIRATION_SECONDS:
        return False
    if _is_blank(config.issuer):
        return False
    return is_valid_signing_algorithm(config.signing_algorithm)


def allows_wildcard_origin(config: SecurityConfig) -> bool:
    return config.cors is not None and WILDCARD_ORIGIN in config.cors.allowed_origins


def validate_security_config(config: SecurityConfig | None) -> bool:
    """Check password floor and the production-only wildcard CORS ban.

    Session, rate limit and the remaining CORS settings are only shape-checked
    by their models; no numeric bounds apply to them here.
    """
    if config is None or config.password_policy is None:
        return False
    min_length = config.password_policy.min_length
    if min_length is None or min_length < MIN_PASSWORD_LENGTH:
        return False
    if config.environment == PRODUCTION_ENVIRONMENT and allows_wildcard_origin(config):
        return False
    return True


def validate_application_config(config: ApplicationConfig | None) -> bool:
    if config is None or config.server is None:
        return False
    port = config.server.port
    if port is None or not MIN_PORT <= port <= MAX_PORT:
        return False
    return not _is_blank(config.server.host)
