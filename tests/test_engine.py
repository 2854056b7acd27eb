"""
Tests for the health check engine.

Tests cover:
- Profile selection and rule registry
- Protocol ordering and percentages
- Start date handling
- Full runs on a history with calculated indicators
"""

import pytest

from domain import (
    ErrorCode,
    HealthCheckProfile,
    NoDataAfterDate,
    ProtocolEntryCategory,
    UnknownRuleError,
)
from domain.healthcheck import (
    CORE_PROFILES,
    PROFILE_RULES,
    RULE_REGISTRY,
    check_instrument,
    check_instrument_with_profile,
    profile_rules,
    run_rules,
)
from domain.indicators import calculate_history


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def trending_history(make_history):
    """A year of rising prices with pullbacks and volume spikes, indicators calculated."""
    closes = []
    volumes = []
    price = 50.0
    for i in range(300):
        step = -1.6 if i % 7 in (3, 4) else 0.9
        price = round(price + step, 2)
        closes.append(price)
        volumes.append(3000 if i % 11 == 0 else 1000 + (i % 5) * 100)

    history = make_history(closes, volumes=volumes)
    calculate_history(history)
    return history


# ============================================================================
# Registry
# ============================================================================


class TestRegistry:
    """Test the rule library and profiles."""

    def test_profiles_reference_registered_rules(self):
        for profile, names in PROFILE_RULES.items():
            for name in names:
                assert name in RULE_REGISTRY, f"{profile.value}: {name}"

    def test_every_profile_has_rules(self):
        assert set(PROFILE_RULES) == set(HealthCheckProfile)

    def test_core_profiles(self):
        assert CORE_PROFILES == (
            HealthCheckProfile.CONFIRMATIONS,
            HealthCheckProfile.SELLING_INTO_STRENGTH,
            HealthCheckProfile.SELLING_INTO_WEAKNESS,
        )

    def test_profile_rules_by_name(self):
        assert profile_rules("confirmations") == PROFILE_RULES[HealthCheckProfile.CONFIRMATIONS]

    def test_unknown_profile(self):
        with pytest.raises(UnknownRuleError) as exc_info:
            profile_rules("bogus")
        assert exc_info.value.code == ErrorCode.UNKNOWN_PROFILE

    def test_unknown_rule(self, make_history, day):
        history = make_history([10, 11])
        with pytest.raises(UnknownRuleError) as exc_info:
            run_rules(history, day(0), ["up_on_volume", "bogus"])
        assert exc_info.value.code == ErrorCode.UNKNOWN_RULE


# ============================================================================
# Engine
# ============================================================================


class TestCheckInstrument:
    """Test running profiles against a history."""

    def test_start_after_newest_quotation(self, make_history, day):
        history = make_history([10, 11, 12])
        with pytest.raises(NoDataAfterDate) as exc_info:
            check_instrument(history, day(3))

        assert exc_info.value.code == ErrorCode.NO_DATA_AFTER_DATE
        assert exc_info.value.newest_date == day(2)

    def test_start_after_newest_quotation_with_profile(self, make_history, day):
        history = make_history([10, 11, 12])
        with pytest.raises(NoDataAfterDate):
            check_instrument_with_profile(history, day(3), HealthCheckProfile.AFTER_BREAKOUT)

    def test_protocol_sorted_by_date(self, trending_history, day):
        protocol = check_instrument(trending_history, day(200))
        dates = [e.date for e in protocol]

        assert len(protocol) > 0
        assert dates == sorted(dates)
        assert dates[0] >= day(200)

    def test_percentages_calculated(self, trending_history, day):
        protocol = check_instrument(trending_history, day(200))
        total = (
            protocol.confirmation_percentage
            + protocol.violation_percentage
            + protocol.uncertain_percentage
        )
        assert 98 <= total <= 102

    def test_confirmations_profile(self, trending_history, day):
        protocol = check_instrument_with_profile(trending_history, day(200), HealthCheckProfile.CONFIRMATIONS)

        assert len(protocol) > 0
        assert all(e.category == ProtocolEntryCategory.CONFIRMATION for e in protocol)
        assert protocol.confirmation_percentage == 100

    def test_profile_by_value(self, trending_history, day):
        by_enum = check_instrument_with_profile(trending_history, day(250), HealthCheckProfile.DISTRIBUTION)
        by_value = check_instrument_with_profile(trending_history, day(250), "distribution")
        assert by_enum.entries == by_value.entries

    def test_merged_profiles_contain_single_profiles(self, trending_history, day):
        merged = check_instrument(trending_history, day(250))
        single = check_instrument_with_profile(trending_history, day(250), HealthCheckProfile.SELLING_INTO_WEAKNESS)

        merged_entries = merged.entries
        for entry in single:
            assert entry in merged_entries

    @pytest.mark.parametrize("profile", list(HealthCheckProfile))
    def test_every_profile_runs(self, trending_history, day, profile):
        protocol = check_instrument_with_profile(trending_history, day(100), profile)
        dates = [e.date for e in protocol]
        assert dates == sorted(dates)

    def test_empty_result(self, make_history, day):
        history = make_history([10], volumes=[0])
        protocol = check_instrument(history, day(0))

        assert len(protocol) == 0
        assert protocol.confirmation_percentage == 0
        assert protocol.violation_percentage == 0
        assert protocol.uncertain_percentage == 0

    def test_rule_runs_once(self, make_history, attach_indicators, day):
        history = attach_indicators(make_history([100, 105], volumes=[1000, 2000]), sma30_volume=1000)
        protocol = run_rules(history, day(0), ["up_on_volume", "up_on_volume"])
        assert len(protocol) == 1
