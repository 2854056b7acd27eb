"""
Price/volume pattern rules.

Patterns are evaluated day by day. A day without a 30-day volume average
or without a previous day is skipped.
"""

from datetime import date
from decimal import Decimal

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.healthcheck.base import DEFAULT_THRESHOLDS, entry, moving_averages, range_threshold, walk
from domain.indicators.performance import performance
from domain.indicators.utils import percent_change, to_decimal
from domain.protocol import ProtocolEntry
from domain.quotations import QuotationHistory


# ============================================================================
# Day checks
# ============================================================================

def _above_average_volume(history: QuotationHistory, index: int) -> bool | None:
    """True/False for the day's volume against its 30-day average; None if no average exists."""
    indicator_set = moving_averages(history, index)
    if indicator_set is None:
        return None
    return history[index].volume > indicator_set.sma30_volume


def is_up_on_volume(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Day gained at least the up threshold on above-average volume."""
    if index + 1 >= len(history) or not _above_average_volume(history, index):
        return False
    return performance(history[index], history[index + 1]) >= to_decimal(thresholds.up_on_volume_percent)


def is_down_on_volume(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Day lost at least the down threshold on above-average volume."""
    if index + 1 >= len(history) or not _above_average_volume(history, index):
        return False
    return performance(history[index], history[index + 1]) <= to_decimal(thresholds.down_on_volume_percent)


def is_churning(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Price barely moved although volume was above average."""
    if index + 1 >= len(history) or not _above_average_volume(history, index):
        return False
    band = to_decimal(thresholds.churning_percent)
    return -band <= performance(history[index], history[index + 1]) <= band


def is_bearish_high_volume_reversal(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Open and close both in the lower part of the day's range on above-average volume."""
    if not _above_average_volume(history, index):
        return False
    quotation = history[index]
    threshold = range_threshold(quotation, to_decimal(thresholds.bearish_reversal_range))
    return quotation.open <= threshold and quotation.close <= threshold


def is_bullish_high_volume_reversal(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Open and close both in the upper part of the day's range on above-average volume."""
    if not _above_average_volume(history, index):
        return False
    quotation = history[index]
    threshold = range_threshold(quotation, to_decimal(thresholds.bullish_reversal_range))
    return quotation.open >= threshold and quotation.close >= threshold


def gap_up_size(history: QuotationHistory, index: int) -> Decimal | None:
    """Percent the day's low opened above the previous day's high; None without a previous day."""
    if index + 1 >= len(history):
        return None
    return percent_change(history[index].low, history[index + 1].high)


# ============================================================================
# Rules
# ============================================================================

def up_on_volume(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag strong up days on above-average volume."""
    return [
        entry(history[i], ProtocolEntryCategory.CONFIRMATION,
              f"Up on volume: {performance(history[i], history[i + 1])}%")
        for i in walk(start_date, history)
        if is_up_on_volume(history, i, thresholds)
    ]


def down_on_volume(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag strong down days on above-average volume."""
    return [
        entry(history[i], ProtocolEntryCategory.VIOLATION,
              f"Down on volume: {performance(history[i], history[i + 1])}%")
        for i in walk(start_date, history)
        if is_down_on_volume(history, i, thresholds)
    ]


def churning(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days of heavy volume without price progress."""
    return [
        entry(history[i], ProtocolEntryCategory.UNCERTAIN,
              f"Churning: {performance(history[i], history[i + 1])}% on above-average volume")
        for i in walk(start_date, history)
        if is_churning(history, i, thresholds)
    ]


def high_volume_reversal(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag bearish reversals on above-average volume."""
    return [
        entry(history[i], ProtocolEntryCategory.VIOLATION, "High-volume reversal: open and close near the low")
        for i in walk(start_date, history)
        if is_bearish_high_volume_reversal(history, i, thresholds)
    ]


def bullish_high_volume_reversal(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag bullish reversals on above-average volume."""
    return [
        entry(history[i], ProtocolEntryCategory.CONFIRMATION, "High-volume reversal: open and close near the high")
        for i in walk(start_date, history)
        if is_bullish_high_volume_reversal(history, i, thresholds)
    ]


def gap_up(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days whose low stayed above the previous high by at least the gap threshold."""
    minimum = to_decimal(thresholds.gap_up_percent)
    entries = []
    for i in walk(start_date, history):
        size = gap_up_size(history, i)
        if size is not None and size >= minimum:
            entries.append(entry(history[i], ProtocolEntryCategory.UNCERTAIN, f"Gap up: {size}%"))
    return entries
