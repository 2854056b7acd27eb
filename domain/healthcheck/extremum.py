"""
Extremum rules.

Each rule scans the whole history once for its extreme day and reports it
only if that day lies on or after the start date.
"""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.healthcheck.base import DEFAULT_THRESHOLDS, entry, start_index
from domain.indicators.performance import performance
from domain.indicators.utils import ZERO, percent_change
from domain.protocol import ProtocolEntry
from domain.quotations import QuotationHistory


def _extreme_index(
    history: QuotationHistory,
    value: Callable[[int], Decimal | int | None],
    largest: bool = True,
) -> tuple[int, Decimal | int] | None:
    """Index and value of the largest (smallest) value; the most recent day wins ties."""
    best = None
    for i in range(len(history)):
        current = value(i)
        if current is None:
            continue
        if best is None or (current > best[1] if largest else current < best[1]):
            best = (i, current)
    return best


def _day_performance(history: QuotationHistory) -> Callable[[int], Decimal | None]:
    def value(i: int) -> Decimal | None:
        if i + 1 >= len(history):
            return None
        return performance(history[i], history[i + 1])
    return value


def spread(history: QuotationHistory, index: int) -> Decimal:
    """Percent distance of the day's high above its low."""
    quotation = history[index]
    return percent_change(quotation.high, quotation.low)


def _report(
    start_date: date,
    history: QuotationHistory,
    extreme: tuple[int, Decimal | int] | None,
    category: ProtocolEntryCategory,
    text: str,
) -> list[ProtocolEntry]:
    start_index(start_date, history)
    if extreme is None:
        return []

    index, value = extreme
    quotation = history[index]
    if quotation.date < start_date:
        return []
    return [entry(quotation, category, text.format(value=value))]


def largest_down_day(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Report the largest daily loss of the history."""
    extreme = _extreme_index(history, _day_performance(history), largest=False)
    if extreme is not None and extreme[1] >= ZERO:
        extreme = None
    return _report(
        start_date, history, extreme, ProtocolEntryCategory.VIOLATION,
        "Largest down day of the trading history: {value}%",
    )


def largest_up_day(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Report the largest daily gain of the history."""
    extreme = _extreme_index(history, _day_performance(history))
    if extreme is not None and extreme[1] <= ZERO:
        extreme = None
    return _report(
        start_date, history, extreme, ProtocolEntryCategory.UNCERTAIN,
        "Largest up day of the trading history: {value}%",
    )


def largest_daily_spread(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Report the day with the largest high/low spread of the history."""
    extreme = _extreme_index(history, lambda i: spread(history, i))
    if extreme is not None and extreme[1] <= ZERO:
        extreme = None
    return _report(
        start_date, history, extreme, ProtocolEntryCategory.UNCERTAIN,
        "Largest daily spread of the trading history: {value}%",
    )


def largest_daily_volume(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Report the day with the largest volume of the history."""
    extreme = _extreme_index(history, lambda i: history[i].volume)
    if extreme is not None and extreme[1] == 0:
        extreme = None
    return _report(
        start_date, history, extreme, ProtocolEntryCategory.UNCERTAIN,
        "Largest daily volume of the trading history: {value}",
    )
