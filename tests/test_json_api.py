"""
Tests for JSON API responses and text formatting.

Tests cover:
- Protocol responses
- Date-based grouping
- Indicator set responses
- Plain text output
"""

from datetime import date
from decimal import Decimal

from domain import Protocol, ProtocolEntry, ProtocolEntryCategory
from domain.indicators import IndicatorSet
from presentation import (
    format_indicators,
    format_protocol,
    to_date_based_protocol,
    to_indicator_response,
    to_json,
    to_protocol_response,
)


def _protocol() -> Protocol:
    protocol = Protocol([
        ProtocolEntry(date=date(2024, 1, 2), category=ProtocolEntryCategory.VIOLATION, text="Down on volume: -4.00%"),
        ProtocolEntry(date=date(2024, 1, 1), category=ProtocolEntryCategory.CONFIRMATION, text="Close near high"),
        ProtocolEntry(date=date(2024, 1, 2), category=ProtocolEntryCategory.CONFIRMATION, text="Close near high"),
        ProtocolEntry(date=date(2024, 1, 2), category=ProtocolEntryCategory.UNCERTAIN, text="Gap up: 2.10%"),
    ])
    protocol.sort_by_date()
    protocol.calculate_percentages()
    return protocol


class TestProtocolResponse:
    """Test protocol conversion."""

    def test_to_protocol_response(self):
        response = to_protocol_response(_protocol(), symbol="ACME", profile="confirmations")

        assert response.symbol == "ACME"
        assert response.total_entries == 4
        assert response.confirmation_percentage == 50
        assert response.violation_percentage == 25
        assert response.uncertain_percentage == 25
        assert response.entries[0].date == date(2024, 1, 1)

    def test_to_json(self):
        data = to_json(to_protocol_response(_protocol()))

        assert data["entries"][0] == {"date": "2024-01-01", "category": "confirmation", "text": "Close near high"}
        assert data["profile"] is None
        assert isinstance(data["generated_at"], str)


class TestDateBasedProtocol:
    """Test grouping by day."""

    def test_groups(self):
        response = to_date_based_protocol(_protocol(), symbol="ACME")

        assert [g.date for g in response.dates] == [date(2024, 1, 1), date(2024, 1, 2)]
        first, second = response.dates
        assert len(first.entries) == 1
        assert first.confirmation_percentage == 100
        assert len(second.entries) == 3
        assert second.violation_percentage == 33
        assert second.confirmation_percentage == 33
        assert second.uncertain_percentage == 33

    def test_empty_protocol(self):
        assert to_date_based_protocol(Protocol()).dates == []


class TestIndicatorResponse:
    """Test indicator set conversion."""

    def test_to_indicator_response(self):
        indicator_set = IndicatorSet(sma50=Decimal("101.250"), sma30_volume=250000, rs_number=87, is_most_recent=True)
        response = to_indicator_response(indicator_set, date(2024, 1, 2), "ACME")

        assert response.sma50 == Decimal("101.250")
        assert response.rs_number == 87

        data = to_json(response)
        assert data["sma50"] == "101.250"
        assert data["date"] == "2024-01-02"
        assert "is_most_recent" not in data


class TestTextFormatting:
    """Test plain text output."""

    def test_format_protocol(self):
        text = format_protocol(_protocol(), title="ACME")

        assert text.startswith("## ACME")
        assert "2024-01-01  [+] Close near high" in text
        assert "2024-01-02  [-] Down on volume: -4.00%" in text
        assert "| 50% | 25% | 25% |" in text

    def test_format_empty_protocol(self):
        protocol = Protocol()
        protocol.calculate_percentages()
        assert "*No findings*" in format_protocol(protocol)

    def test_format_indicators(self):
        text = format_indicators(IndicatorSet(sma10=Decimal("12.500")), date(2024, 1, 2))

        assert "## Indicators - 2024-01-02" in text
        assert "| sma10 | 12.500 |" in text
        assert "is_most_recent" not in text
