"""
Tests for the health check protocol.

Tests cover:
- Entry validation
- Date ordering
- Category percentages
"""

from datetime import date

import pytest
from pydantic import ValidationError

from domain import Protocol, ProtocolEntry, ProtocolEntryCategory


def _entry(day: int, category=ProtocolEntryCategory.CONFIRMATION, text="finding") -> ProtocolEntry:
    return ProtocolEntry(date=date(2024, 1, day), category=category, text=text)


class TestProtocolEntry:
    """Test protocol entries."""

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            _entry(1, text="")

    def test_immutable(self):
        entry = _entry(1)
        with pytest.raises(ValidationError):
            entry.text = "changed"


class TestProtocol:
    """Test protocol ordering and statistics."""

    def test_sort_by_date_is_stable(self):
        protocol = Protocol([_entry(3, text="a"), _entry(1, text="b"), _entry(3, text="c"), _entry(2, text="d")])
        protocol.sort_by_date()

        assert [e.text for e in protocol] == ["b", "d", "a", "c"]

    def test_empty_protocol_percentages(self):
        protocol = Protocol()
        protocol.calculate_percentages()

        assert len(protocol) == 0
        assert protocol.confirmation_percentage == 0
        assert protocol.violation_percentage == 0
        assert protocol.uncertain_percentage == 0

    def test_percentages(self):
        protocol = Protocol([
            _entry(1, ProtocolEntryCategory.CONFIRMATION),
            _entry(1, ProtocolEntryCategory.VIOLATION),
            _entry(2, ProtocolEntryCategory.VIOLATION),
            _entry(3, ProtocolEntryCategory.UNCERTAIN),
        ])
        protocol.calculate_percentages()

        assert protocol.confirmation_percentage == 25
        assert protocol.violation_percentage == 50
        assert protocol.uncertain_percentage == 25

    def test_percentages_round_half_up(self):
        protocol = Protocol([
            _entry(1, ProtocolEntryCategory.CONFIRMATION),
            _entry(1, ProtocolEntryCategory.VIOLATION),
            _entry(1, ProtocolEntryCategory.UNCERTAIN),
        ])
        protocol.calculate_percentages()

        assert protocol.percentage(ProtocolEntryCategory.CONFIRMATION) == 33
        total = sum(protocol.percentage(c) for c in ProtocolEntryCategory)
        assert 98 <= total <= 102

    def test_percentages_need_recalculation(self):
        protocol = Protocol()
        protocol.calculate_percentages()
        protocol.add(_entry(1))

        assert protocol.confirmation_percentage == 0
        protocol.calculate_percentages()
        assert protocol.confirmation_percentage == 100

    def test_dates_and_entries_of_date(self):
        protocol = Protocol([_entry(1, text="a"), _entry(2, text="b"), _entry(1, text="c")])

        assert protocol.dates() == [date(2024, 1, 1), date(2024, 1, 2)]
        assert [e.text for e in protocol.entries_of_date(date(2024, 1, 1))] == ["a", "c"]

    def test_count(self):
        protocol = Protocol()
        protocol.extend([_entry(1), _entry(2), _entry(3, ProtocolEntryCategory.VIOLATION)])

        assert protocol.count(ProtocolEntryCategory.CONFIRMATION) == 2
        assert protocol.count(ProtocolEntryCategory.VIOLATION) == 1

    def test_entries_is_a_copy(self):
        protocol = Protocol([_entry(1)])
        protocol.entries.clear()
        assert len(protocol) == 1
