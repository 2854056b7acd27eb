"""Shared fixtures: quotation and history builders."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from domain import Quotation, QuotationHistory
from domain.indicators import IndicatorSet

START = date(2024, 1, 1)


def _decimal(value) -> Decimal:
    return Decimal(str(value))


@pytest.fixture
def make_quotation():
    """Factory for a single quotation; open defaults to close, high/low enclose both."""

    def factory(day=START, close=10, open=None, high=None, low=None, volume=1000, **kwargs):
        close = _decimal(close)
        open = _decimal(open) if open is not None else close
        high = _decimal(high) if high is not None else max(open, close)
        low = _decimal(low) if low is not None else min(open, close)
        return Quotation(date=day, open=open, high=high, low=low, close=close, volume=volume, **kwargs)

    return factory


@pytest.fixture
def make_history(make_quotation):
    """
    Factory for a history of consecutive days.

    Closes and volumes are given oldest first. `bars` overrides single
    quotations by position (oldest first) with keyword arguments for
    make_quotation.
    """

    def factory(closes, volumes=None, bars=None):
        volumes = volumes or [1000] * len(closes)
        bars = bars or {}
        quotations = []
        for i, (close, volume) in enumerate(zip(closes, volumes)):
            fields = {"close": close, "volume": volume}
            fields.update(bars.get(i, {}))
            quotations.append(make_quotation(day=START + timedelta(days=i), **fields))
        return QuotationHistory(quotations)

    return factory


@pytest.fixture
def day():
    """Date of the bar at a position (oldest first) of a make_history history."""

    def factory(position: int) -> date:
        return START + timedelta(days=position)

    return factory


@pytest.fixture
def attach_indicators():
    """Attach indicator sets with the given fields to every bar of a history."""

    def factory(history: QuotationHistory, **fields) -> QuotationHistory:
        for i in range(len(history)):
            history.set_indicator(i, IndicatorSet(**fields))
        return history

    return factory
