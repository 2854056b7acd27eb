"""Rules on where a day closed within its range and within the trailing year."""

from datetime import date
from decimal import Decimal

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.healthcheck.base import DEFAULT_THRESHOLDS, entry, range_threshold, walk
from domain.indicators.structure import TRADING_DAYS_PER_YEAR
from domain.indicators.utils import to_decimal
from domain.protocol import ProtocolEntry
from domain.quotations import Quotation, QuotationHistory


def is_close_near_high(quotation: Quotation, threshold: float | Decimal = 0.9) -> bool:
    """Close at or above the given share of the day's range."""
    return quotation.close >= range_threshold(quotation, to_decimal(threshold))


def is_close_near_low(quotation: Quotation, threshold: float | Decimal = 0.1) -> bool:
    """Close strictly below the given share of the day's range."""
    return quotation.close < range_threshold(quotation, to_decimal(threshold))


def is_new_52_week_high(history: QuotationHistory, index: int) -> bool:
    """Close above every close of the preceding trading year; needs at least one previous day."""
    if index + 1 >= len(history):
        return False

    end = min(index + TRADING_DAYS_PER_YEAR, len(history))
    close = history[index].close
    return all(close > history[j].close for j in range(index + 1, end))


def close_near_high(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days closing in the top of their range."""
    return [
        entry(history[i], ProtocolEntryCategory.CONFIRMATION, "Close near high")
        for i in walk(start_date, history)
        if is_close_near_high(history[i], thresholds.close_near_high_range)
    ]


def close_near_low(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days closing in the bottom of their range."""
    return [
        entry(history[i], ProtocolEntryCategory.VIOLATION, "Close near low")
        for i in walk(start_date, history)
        if is_close_near_low(history[i], thresholds.close_near_low_range)
    ]


def new_52_week_high(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag closes above the highest close of the trailing year."""
    return [
        entry(history[i], ProtocolEntryCategory.CONFIRMATION, f"New 52-week high: {history[i].close}")
        for i in walk(start_date, history)
        if is_new_52_week_high(history, i)
    ]
