from __future__ import annotations

import pytest

from src.worktime.worktime.core.enums import RoundingRule, Weekday
from src.worktime.worktime.core.exceptions import NotFoundError, ValidationError


def test_set_weekly_off_days(container):
    user = container.user_settings_service.set_weekly_off_days(1, ["friday", "Saturday"])
    assert user.weekly_off_days == frozenset({Weekday.FRIDAY, Weekday.SATURDAY})


def test_at_most_two_off_days(container):
    with pytest.raises(ValidationError):
        container.user_settings_service.set_weekly_off_days(1, ["Friday", "Saturday", "Sunday"])


def test_unknown_weekday(container):
    with pytest.raises(ValidationError):
        container.user_settings_service.set_weekly_off_days(1, ["Caturday"])


def test_set_rounding_rule(container):
    user = container.user_settings_service.set_rounding_rule(1, "10")
    assert user.rounding_rule == RoundingRule.TEN
    with pytest.raises(ValidationError):
        container.user_settings_service.set_rounding_rule(1, "15")


def test_register_and_get(container):
    user = container.user_settings_service.register(full_name="B", committed_hours_per_day=7.5)
    assert container.user_settings_service.get(user.user_id).committed_hours_per_day == 7.5
    with pytest.raises(NotFoundError):
        container.user_settings_service.get(404)
