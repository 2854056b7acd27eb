"""Shared building blocks of the health check rules."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.errors import NoDataAfterDate
from domain.indicators.base import IndicatorSet
from domain.indicators.utils import round_half_up
from domain.protocol import ProtocolEntry
from domain.quotations import Quotation, QuotationHistory

# (start_date, history, thresholds) -> findings
HealthCheckRule = Callable[[date, QuotationHistory, HealthCheckThresholds], list[ProtocolEntry]]

DEFAULT_THRESHOLDS = HealthCheckThresholds()


def start_index(start_date: date, history: QuotationHistory) -> int:
    """
    Get the index of the first quotation to evaluate.

    Raises:
        NoDataAfterDate: If the start date is newer than every quotation
    """
    index = history.index_of_date(start_date)
    if index is None:
        newest = history.most_recent.date if history.most_recent else None
        raise NoDataAfterDate(start_date, newest)
    return index


def walk(start_date: date, history: QuotationHistory) -> range:
    """Indices from the start date toward the most recent quotation."""
    return range(start_index(start_date, history), -1, -1)


def entry(quotation: Quotation, category: ProtocolEntryCategory, text: str) -> ProtocolEntry:
    return ProtocolEntry(date=quotation.date, category=category, text=text)


def moving_averages(history: QuotationHistory, index: int) -> IndicatorSet | None:
    """Indicator set of a day with usable volume average, or None if the day has to be skipped."""
    indicator_set = history.indicator_at(index)
    if indicator_set is None or indicator_set.sma30_volume == 0:
        return None
    return indicator_set


def range_threshold(quotation: Quotation, share: Decimal) -> Decimal:
    """Price at the given share of the day's range above the low."""
    return quotation.low + (quotation.high - quotation.low) * share


def median_price(quotation: Quotation) -> Decimal:
    """Middle of the day's range, 3 decimals."""
    return round_half_up((quotation.low + quotation.high) / 2, 3)
