"""
Tests for quotations and the quotation history.

Tests cover:
- OHLC validation
- Newest-first ordering and date lookup
- Windows and indicator attachment
- Weekly aggregation
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from domain import (
    Currency,
    DuplicateQuotationError,
    ErrorCode,
    QuotationHistory,
    QuotationNotFoundError,
)
from domain.indicators import IndicatorSet


class TestQuotation:
    """Test quotation validation."""

    def test_valid_quotation(self, make_quotation):
        quotation = make_quotation(close=10, open=9, high=11, low=8)
        assert quotation.close == Decimal("10")
        assert quotation.currency == Currency.USD

    def test_low_above_high(self, make_quotation):
        with pytest.raises(ValidationError):
            make_quotation(close=10, high=9, low=11)

    def test_close_outside_range(self, make_quotation):
        with pytest.raises(ValidationError):
            make_quotation(close=12, open=10, high=11, low=9)

    def test_non_positive_price(self, make_quotation):
        with pytest.raises(ValidationError):
            make_quotation(close=0)

    def test_negative_volume(self, make_quotation):
        with pytest.raises(ValidationError):
            make_quotation(volume=-1)

    def test_immutable(self, make_quotation):
        quotation = make_quotation()
        with pytest.raises(ValidationError):
            quotation.close = Decimal("11")


class TestQuotationHistory:
    """Test ordering, lookup and windows."""

    def test_sorted_newest_first(self, make_quotation):
        quotations = [make_quotation(day=date(2024, 1, d), close=d) for d in (3, 1, 2)]
        history = QuotationHistory(quotations)

        assert [q.date.day for q in history] == [3, 2, 1]
        assert history.most_recent.date == date(2024, 1, 3)
        assert history.oldest.date == date(2024, 1, 1)

    def test_duplicate_date(self, make_quotation):
        quotations = [make_quotation(day=date(2024, 1, 1)), make_quotation(day=date(2024, 1, 1), close=11)]
        with pytest.raises(DuplicateQuotationError) as exc_info:
            QuotationHistory(quotations)
        assert exc_info.value.code == ErrorCode.DUPLICATE_QUOTATION

    def test_empty_history(self):
        history = QuotationHistory([])
        assert len(history) == 0
        assert history.most_recent is None
        assert history.currency is None
        assert history.index_of_date(date(2024, 1, 1)) is None

    def test_index_of(self, make_history):
        history = make_history([10, 11, 12])
        assert history.index_of(history[1]) == 1

    def test_index_of_foreign_quotation(self, make_history, make_quotation):
        history = make_history([10, 11, 12])
        with pytest.raises(QuotationNotFoundError):
            history.index_of(make_quotation(day=date(2030, 1, 1)))

    def test_index_of_date_exact(self, make_history, day):
        history = make_history([10, 11, 12])
        assert history.index_of_date(day(1)) == 1

    def test_index_of_date_gap_takes_next_newer(self, make_quotation):
        # Friday and Monday; Saturday maps to Monday
        history = QuotationHistory([
            make_quotation(day=date(2024, 1, 5)),
            make_quotation(day=date(2024, 1, 8)),
        ])
        assert history.index_of_date(date(2024, 1, 6)) == 0

    def test_index_of_date_before_history(self, make_history):
        history = make_history([10, 11, 12])
        assert history.index_of_date(date(2020, 1, 1)) == 2

    def test_index_of_date_after_history(self, make_history, day):
        history = make_history([10, 11, 12])
        assert history.index_of_date(day(3)) is None

    def test_window(self, make_history):
        history = make_history([10, 11, 12, 13])
        window = history.window(1, 2)
        assert [q.close for q in window] == [Decimal("12"), Decimal("11")]

    def test_window_incomplete(self, make_history):
        history = make_history([10, 11, 12, 13])
        assert history.window(3, 2) is None
        assert history.window(0, 0) is None

    def test_indicator_attachment(self, make_history):
        history = make_history([10, 11])
        assert history.indicator_at(0) is None

        indicator_set = IndicatorSet(sma10=Decimal("10.5"))
        history.set_indicator(0, indicator_set)
        assert history.indicator_at(0) is indicator_set

        history.set_indicator(0, None)
        assert history.indicator_at(0) is None


class TestWeeklyAggregation:
    """Test weekly bars."""

    def test_weekly_bars(self, make_quotation):
        # Mon 2024-01-01 .. Wed 2024-01-10, two ISO weeks
        days = [date(2024, 1, 1) + timedelta(days=i) for i in (0, 1, 2, 3, 4, 7, 8, 9)]
        quotations = [
            make_quotation(day=d, close=10 + i, open=10 + i, high=12 + i, low=9 + i, volume=100)
            for i, d in enumerate(days)
        ]
        weekly = QuotationHistory(quotations).weekly()

        assert len(weekly) == 2
        newest, oldest = weekly[0], weekly[1]
        assert oldest.date == date(2024, 1, 5)
        assert oldest.open == Decimal("10")
        assert oldest.close == Decimal("14")
        assert oldest.high == Decimal("16")
        assert oldest.low == Decimal("9")
        assert oldest.volume == 500
        assert newest.date == date(2024, 1, 10)
        assert newest.volume == 300
