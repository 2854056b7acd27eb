"""
Health check engine.

Runs a profile's rules over one instrument's history and assembles the
findings into a Protocol sorted by date.

Usage:
    from domain.healthcheck import check_instrument, check_instrument_with_profile

    protocol = check_instrument(history, date(2024, 3, 1))
    protocol = check_instrument_with_profile(history, date(2024, 3, 1), HealthCheckProfile.AFTER_BREAKOUT)
"""

import logging
from collections.abc import Iterable
from datetime import date

from config.schema import HealthCheckThresholds
from domain.enums import HealthCheckProfile
from domain.errors import ErrorCode, UnknownRuleError
from domain.healthcheck import averages, climax, counting, extremum, high_low, market, pattern
from domain.healthcheck.base import DEFAULT_THRESHOLDS, HealthCheckRule, start_index
from domain.protocol import Protocol
from domain.quotations import QuotationHistory

logger = logging.getLogger(__name__)


# ============================================================================
# Rule library
# ============================================================================

RULE_REGISTRY: dict[str, HealthCheckRule] = {
    # Moving averages
    "close_below_sma50": averages.close_below_sma50,
    "close_below_ema21": averages.close_below_ema21,
    "extended_above_sma200": averages.extended_above_sma200,
    "extended_one_year": averages.extended_one_year,
    # Climax
    "climax_move_one_week": climax.climax_move_one_week,
    "climax_move_three_weeks": climax.climax_move_three_weeks,
    "time_climax": climax.time_climax,
    # Counting
    "more_up_than_down_days": counting.more_up_than_down_days,
    "more_down_than_up_days": counting.more_down_than_up_days,
    "more_good_than_bad_closes": counting.more_good_than_bad_closes,
    "more_bad_than_good_closes": counting.more_bad_than_good_closes,
    "three_lower_closes": counting.three_lower_closes,
    "three_higher_closes": counting.three_higher_closes,
    # Extremum
    "largest_up_day": extremum.largest_up_day,
    "largest_down_day": extremum.largest_down_day,
    "largest_daily_spread": extremum.largest_daily_spread,
    "largest_daily_volume": extremum.largest_daily_volume,
    # Range and trailing year
    "close_near_high": high_low.close_near_high,
    "close_near_low": high_low.close_near_low,
    "new_52_week_high": high_low.new_52_week_high,
    # Accumulation and distribution
    "distribution_day": market.distribution_day,
    "follow_through_day": market.follow_through_day,
    "pocket_pivot": market.pocket_pivot,
    # Price/volume patterns
    "up_on_volume": pattern.up_on_volume,
    "down_on_volume": pattern.down_on_volume,
    "churning": pattern.churning,
    "high_volume_reversal": pattern.high_volume_reversal,
    "bullish_high_volume_reversal": pattern.bullish_high_volume_reversal,
    "gap_up": pattern.gap_up,
}

PROFILE_RULES: dict[HealthCheckProfile, tuple[str, ...]] = {
    HealthCheckProfile.CONFIRMATIONS: (
        "more_up_than_down_days",
        "more_good_than_bad_closes",
        "up_on_volume",
    ),
    HealthCheckProfile.SELLING_INTO_STRENGTH: (
        "largest_up_day",
        "largest_daily_spread",
        "largest_daily_volume",
        "churning",
        "time_climax",
        "climax_move_one_week",
        "climax_move_three_weeks",
    ),
    HealthCheckProfile.SELLING_INTO_WEAKNESS: (
        "close_below_sma50",
        "close_below_ema21",
        "largest_down_day",
        "more_down_than_up_days",
        "more_bad_than_good_closes",
        "down_on_volume",
        "high_volume_reversal",
        "three_lower_closes",
    ),
    HealthCheckProfile.AFTER_BREAKOUT: (
        "close_near_high",
        "close_near_low",
        "gap_up",
        "new_52_week_high",
        "three_higher_closes",
        "bullish_high_volume_reversal",
        "pocket_pivot",
        "follow_through_day",
    ),
    HealthCheckProfile.DISTRIBUTION: (
        "distribution_day",
        "extended_above_sma200",
        "extended_one_year",
        "churning",
    ),
}

# Profiles merged by check_instrument
CORE_PROFILES = (
    HealthCheckProfile.CONFIRMATIONS,
    HealthCheckProfile.SELLING_INTO_STRENGTH,
    HealthCheckProfile.SELLING_INTO_WEAKNESS,
)


# ============================================================================
# Engine
# ============================================================================

def profile_rules(profile: HealthCheckProfile | str) -> tuple[str, ...]:
    """
    Get the rule names of a profile.

    Raises:
        UnknownRuleError: If the profile does not exist
    """
    try:
        return PROFILE_RULES[HealthCheckProfile(profile)]
    except (ValueError, KeyError):
        raise UnknownRuleError(str(profile), code=ErrorCode.UNKNOWN_PROFILE) from None


def run_rules(
    history: QuotationHistory,
    start_date: date,
    rule_names: Iterable[str],
    thresholds: HealthCheckThresholds | None = None,
) -> Protocol:
    """
    Run the named rules and collect their findings.

    Each rule runs once even if named more than once. The returned protocol
    is sorted ascending by date and has its percentages calculated.

    Raises:
        UnknownRuleError: If a rule name is not in the rule library
        NoDataAfterDate: If the start date is newer than the most recent quotation
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    names = list(dict.fromkeys(rule_names))
    unknown = [name for name in names if name not in RULE_REGISTRY]
    if unknown:
        raise UnknownRuleError(unknown[0])

    start_index(start_date, history)

    protocol = Protocol()
    for name in names:
        findings = RULE_REGISTRY[name](start_date, history, thresholds)
        logger.debug(f"{name}: {len(findings)} findings")
        protocol.extend(findings)

    protocol.sort_by_date()
    protocol.calculate_percentages()
    return protocol


def check_instrument(
    history: QuotationHistory,
    start_date: date,
    thresholds: HealthCheckThresholds | None = None,
) -> Protocol:
    """
    Run the confirmation, selling-into-strength and selling-into-weakness profiles.

    Args:
        history: Quotation history with indicators calculated
        start_date: First day to evaluate
        thresholds: Rule thresholds, defaults when omitted

    Returns:
        Merged protocol sorted ascending by date

    Raises:
        NoDataAfterDate: If the start date is newer than the most recent quotation
    """
    names = [name for profile in CORE_PROFILES for name in PROFILE_RULES[profile]]
    protocol = run_rules(history, start_date, names, thresholds)
    logger.info(f"Health check since {start_date}: {len(protocol)} findings")
    return protocol


def check_instrument_with_profile(
    history: QuotationHistory,
    start_date: date,
    profile: HealthCheckProfile | str,
    thresholds: HealthCheckThresholds | None = None,
) -> Protocol:
    """
    Run the rules of a single profile.

    Raises:
        UnknownRuleError: If the profile does not exist
        NoDataAfterDate: If the start date is newer than the most recent quotation
    """
    protocol = run_rules(history, start_date, profile_rules(profile), thresholds)
    logger.info(f"Health check ({HealthCheckProfile(profile).value}) since {start_date}: {len(protocol)} findings")
    return protocol
