from __future__ import annotations

from ...common.validators import require_rounding_rule
from ...core.enums import RoundingRule
from .base import RoundingPolicy
from .no_rounding import NoRounding
from .step_rounding import StepRounding

_POLICIES: dict[RoundingRule, RoundingPolicy] = {
    RoundingRule.NONE: NoRounding(),
    RoundingRule.FIVE: StepRounding(5),
    RoundingRule.TEN: StepRounding(10),
}


def policy_for(rule: RoundingRule | str) -> RoundingPolicy:
    return _POLICIES[require_rounding_rule(rule)]


def round_minutes(minutes: int, rule: RoundingRule | str) -> int:
    return policy_for(rule).apply(minutes)
