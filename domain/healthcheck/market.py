"""
Accumulation and distribution rules.

Distribution days and follow-through days compare a day with the previous
day only. Pocket pivots look back over the previous two weeks of trading.
"""

from datetime import date

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.healthcheck.base import DEFAULT_THRESHOLDS, entry, walk
from domain.indicators.moving_averages import simple_moving_average
from domain.indicators.performance import is_up_day, performance
from domain.indicators.utils import ZERO, to_decimal
from domain.protocol import ProtocolEntry
from domain.quotations import QuotationHistory

SMA_POCKET_PIVOT_DAYS = 10


# ============================================================================
# Day checks
# ============================================================================

def is_distribution_day(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """
    Day declined on higher volume than the previous day.

    A distribution day is negated once one of the following days closes at
    least the negation percentage above it.
    """
    if index + 1 >= len(history):
        return False

    day, previous = history[index], history[index + 1]
    if performance(day, previous) >= to_decimal(thresholds.distribution_day_percent):
        return False
    if day.volume <= previous.volume:
        return False

    negation = to_decimal(thresholds.distribution_negation_percent)
    newest = max(index - thresholds.distribution_negation_days, 0)
    return not any(performance(history[j], day) >= negation for j in range(index - 1, newest - 1, -1))


def is_follow_through_day(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Day advanced strongly on higher volume than the previous day."""
    if index + 1 >= len(history):
        return False

    day, previous = history[index], history[index + 1]
    return (
        performance(day, previous) >= to_decimal(thresholds.follow_through_day_percent)
        and day.volume > previous.volume
    )


def is_pocket_pivot(
    history: QuotationHistory,
    index: int,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """
    Up day whose volume exceeds every down-day volume of the lookback period.

    The close must also be above the 10-day SMA without the low being
    extended beyond it.
    """
    lookback = thresholds.pocket_pivot_lookback_days
    if index + lookback + 1 >= len(history) or not is_up_day(history, index):
        return False

    down_volumes = [
        history[j].volume
        for j in range(index + 1, index + lookback + 1)
        if performance(history[j], history[j + 1]) < ZERO
    ]
    if history[index].volume <= max(down_volumes, default=0):
        return False

    indicator_set = history.indicator_at(index)
    sma10 = indicator_set.sma10 if indicator_set is not None else ZERO
    if sma10 == ZERO:
        sma10 = simple_moving_average(SMA_POCKET_PIVOT_DAYS, history[index], history)
    if sma10 == ZERO:
        return False

    quotation = history[index]
    extension = 1 + to_decimal(thresholds.pocket_pivot_extension_percent) / 100
    return quotation.close > sma10 and not quotation.low > sma10 * extension


# ============================================================================
# Rules
# ============================================================================

def distribution_day(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag distribution days that were not negated by a later advance."""
    return [
        entry(history[i], ProtocolEntryCategory.VIOLATION,
              f"Distribution day: {performance(history[i], history[i + 1])}% on higher volume")
        for i in walk(start_date, history)
        if is_distribution_day(history, i, thresholds)
    ]


def follow_through_day(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag strong advances on higher volume."""
    return [
        entry(history[i], ProtocolEntryCategory.CONFIRMATION,
              f"Follow-through day: {performance(history[i], history[i + 1])}% on higher volume")
        for i in walk(start_date, history)
        if is_follow_through_day(history, i, thresholds)
    ]


def pocket_pivot(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag pocket pivots."""
    return [
        entry(history[i], ProtocolEntryCategory.CONFIRMATION, "Pocket pivot")
        for i in walk(start_date, history)
        if is_pocket_pivot(history, i, thresholds)
    ]
