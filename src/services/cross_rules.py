from collections.abc import Callable
from dataclasses import dataclass

from core.config_models import CompleteConfiguration


@dataclass(frozen=True)
class CrossRule:
    """A named invariant spanning more than one domain config."""

    name: str
    message: str
    predicate: Callable[[CompleteConfiguration], bool]

    def holds(self, config: CompleteConfiguration) -> bool:
        return self.predicate(config)


def _token_within_session(config: CompleteConfiguration) -> bool:
    # Vacuously true unless both sides are configured
    jwt = config.jwt
    session = config.security.session if config.security is not None else None
    if jwt is None or jwt.expiration_time is None or session is None or session.session_timeout is None:
        return True
    return jwt.expiration_time <= session.session_timeout.total_seconds()


CROSS_RULES: tuple[CrossRule, ...] = (
    CrossRule(
        name="token_within_session",
        message="JWT expiration time exceeds the session timeout",
        predicate=_token_within_session,
    ),
)


def failed_cross_rules(config: CompleteConfiguration) -> list[CrossRule]:
    """Return the rules ``config`` violates, in declaration order."""
    return [rule for rule in CROSS_RULES if not rule.holds(config)]


def check_cross_rules(config: CompleteConfiguration) -> bool:
    return all(rule.holds(config) for rule in CROSS_RULES)
