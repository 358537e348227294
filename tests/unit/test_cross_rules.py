from datetime import timedelta

import pytest

from services.cross_rules import CROSS_RULES, check_cross_rules, failed_cross_rules
from tests.factories.configs import make_complete_configuration, make_jwt_config, make_security_config


@pytest.mark.unit
def test_token_shorter_than_session_passes():
    config = make_complete_configuration(
        jwt=make_jwt_config(expiration_time=900),
        security=make_security_config(session_timeout=timedelta(minutes=30)),
    )
    assert check_cross_rules(config) is True
    assert failed_cross_rules(config) == []


@pytest.mark.unit
def test_token_equal_to_session_passes():
    config = make_complete_configuration(
        jwt=make_jwt_config(expiration_time=1800),
        security=make_security_config(session_timeout=timedelta(minutes=30)),
    )
    assert check_cross_rules(config) is True


@pytest.mark.unit
def test_token_outliving_session_fails():
    config = make_complete_configuration(
        jwt=make_jwt_config(expiration_time=3600),
        security=make_security_config(session_timeout=timedelta(minutes=30)),
    )
    assert check_cross_rules(config) is False
    assert [rule.name for rule in failed_cross_rules(config)] == ["token_within_session"]


@pytest.mark.unit
@pytest.mark.parametrize("missing", ["jwt", "security"])
def test_rule_is_vacuous_when_a_side_is_absent(missing):
    config = make_complete_configuration(
        jwt=make_jwt_config(expiration_time=86400),
        security=make_security_config(session_timeout=timedelta(seconds=1)),
    )
    setattr(config, missing, None)
    assert check_cross_rules(config) is True


@pytest.mark.unit
def test_rule_is_vacuous_without_session_or_timeout():
    config = make_complete_configuration(
        jwt=make_jwt_config(expiration_time=86400),
        security=make_security_config(session_timeout=None),
    )
    assert check_cross_rules(config) is True

    config.security.session = None
    assert check_cross_rules(config) is True


@pytest.mark.unit
def test_rule_table_is_closed_and_named():
    assert [rule.name for rule in CROSS_RULES] == ["token_within_session"]
    assert all(rule.message for rule in CROSS_RULES)
