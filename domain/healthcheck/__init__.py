"""Health check rules and the engine running them.

A rule inspects a quotation history from a start date toward the most
recent quotation and reports findings as protocol entries. Rules are
bundled into profiles; the engine runs a profile and returns a Protocol
sorted by date.

Profiles:
    - CONFIRMATIONS: signs of a healthy advance
    - SELLING_INTO_STRENGTH: exhaustion after a strong advance
    - SELLING_INTO_WEAKNESS: breakdowns and heavy selling
    - AFTER_BREAKOUT: behaviour right after a breakout
    - DISTRIBUTION: institutional selling

Example:
    >>> from domain.healthcheck import check_instrument
    >>>
    >>> protocol = check_instrument(history, date(2024, 3, 1))
    >>> protocol.violation_percentage
    25
"""

from domain.healthcheck.engine import (
    CORE_PROFILES,
    PROFILE_RULES,
    RULE_REGISTRY,
    check_instrument,
    check_instrument_with_profile,
    profile_rules,
    run_rules,
)
from domain.healthcheck.high_low import is_close_near_high, is_close_near_low
from domain.healthcheck.pattern import is_down_on_volume, is_up_on_volume

__all__ = [
    # Engine
    "CORE_PROFILES",
    "PROFILE_RULES",
    "RULE_REGISTRY",
    "check_instrument",
    "check_instrument_with_profile",
    "profile_rules",
    "run_rules",
    # Day checks
    "is_close_near_high",
    "is_close_near_low",
    "is_down_on_volume",
    "is_up_on_volume",
]
