import logging

from core.config_models import CompleteConfiguration
from core.exceptions import ConfigurationRejectedError, MissingConfigurationError
from schemas.validation import ValidationResult
from services.cross_rules import check_cross_rules, failed_cross_rules
from services.validators import (
    validate_application_config,
    validate_database_config,
    validate_jwt_config,
    validate_security_config,
)

logger = logging.getLogger(__name__)

DATABASE_ERROR = "Invalid database configuration"
JWT_ERROR = "Invalid JWT configuration"
SECURITY_ERROR = "Invalid security configuration"
APPLICATION_ERROR = "Invalid application configuration"
CROSS_DOMAIN_ERROR_PREFIX = "Invalid cross-domain configuration"


def _require(config: CompleteConfiguration | None) -> CompleteConfiguration:
    if config is None:
        raise MissingConfigurationError(message="Configuration cannot be null")
    return config


class ConfigurationValidator:
    """Compose the domain checks and cross-domain rules into one verdict.

    The validator holds no state. A single instance can be shared between
    threads or tasks validating different configurations.
    """

    def validate_complete(self, config: CompleteConfiguration | None) -> bool:
        """Return True when every domain and cross-domain check passes.

        Raises:
            MissingConfigurationError: ``config`` is None.
        """
        config = _require(config)
        verdict = (
            validate_database_config(config.database)
            and validate_jwt_config(config.jwt)
            and validate_security_config(config.security)
            and validate_application_config(config.application)
            and check_cross_rules(config)
        )
        logger.debug("Configuration verdict for environment=%s: %s", config.environment, verdict)
        return verdict

    def validate_with_details(self, config: CompleteConfiguration | None) -> ValidationResult:
        """Run every check without short-circuiting and collect one message per failure.

        Raises:
            MissingConfigurationError: ``config`` is None.
        """
        config = _require(config)
        errors: list[str] = []

        if not validate_database_config(config.database):
            errors.append(DATABASE_ERROR)
        if not validate_jwt_config(config.jwt):
            errors.append(JWT_ERROR)
        if not validate_security_config(config.security):
            errors.append(SECURITY_ERROR)
        if not validate_application_config(config.application):
            errors.append(APPLICATION_ERROR)
        for rule in failed_cross_rules(config):
            errors.append(f"{CROSS_DOMAIN_ERROR_PREFIX}: {rule.message}")

        for error in errors:
            logger.warning("%s (environment=%s)", error, config.environment)

        return ValidationResult(messages=tuple(errors))

    def ensure_valid(self, config: CompleteConfiguration | None) -> CompleteConfiguration:
        """Return ``config`` unchanged, or raise ConfigurationRejectedError listing every failure."""
        result = self.validate_with_details(config)
        if not result.is_valid:
            raise ConfigurationRejectedError(
                message="Configuration rejected: " + "; ".join(result.errors),
                details={"errors": result.errors},
            )
        return _require(config)


_default_validator = ConfigurationValidator()


def validate_complete(config: CompleteConfiguration | None) -> bool:
    return _default_validator.validate_complete(config)


def validate_with_details(config: CompleteConfiguration | None) -> ValidationResult:
    return _default_validator.validate_with_details(config)


def ensure_valid(config: CompleteConfiguration | None) -> CompleteConfiguration:
    return _default_validator.ensure_valid(config)
