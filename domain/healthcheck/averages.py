"""Moving average rules."""

from datetime import date
from decimal import Decimal

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.healthcheck.base import DEFAULT_THRESHOLDS, entry, walk
from domain.indicators.statistics import percentile_threshold
from domain.indicators.utils import ZERO, crossed_below, percent_change, to_decimal
from domain.protocol import ProtocolEntry
from domain.quotations import QuotationHistory


def _moving_average_breach(
    start_date: date,
    history: QuotationHistory,
    field: str,
    label: str,
) -> list[ProtocolEntry]:
    """Flag closes below a moving average after a close at or above it on the previous day."""
    entries = []
    for i in walk(start_date, history):
        if i + 1 >= len(history):
            continue

        current = history.indicator_at(i)
        previous = history.indicator_at(i + 1)
        if current is None or previous is None:
            continue

        level = getattr(current, field)
        previous_level = getattr(previous, field)
        if level == ZERO or previous_level == ZERO:
            continue

        if not crossed_below(history[i + 1].close, previous_level, history[i].close, level):
            continue

        if history[i].volume >= current.sma30_volume:
            text = f"Close below {label} on high volume"
        else:
            text = f"Close below {label} on low volume"
        entries.append(entry(history[i], ProtocolEntryCategory.VIOLATION, text))

    return entries


def close_below_sma50(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag the day the close falls below the 50-day SMA."""
    return _moving_average_breach(start_date, history, "sma50", "SMA(50)")


def close_below_ema21(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag the day the close falls below the 21-day EMA."""
    return _moving_average_breach(start_date, history, "ema21", "EMA(21)")


def extended_above_sma200(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days trading far above the 200-day SMA."""
    minimum = to_decimal(thresholds.extended_above_sma200_percent)
    entries = []
    for i in walk(start_date, history):
        indicator_set = history.indicator_at(i)
        if indicator_set is None or indicator_set.sma200 == ZERO:
            continue

        extension = percent_change(history[i].close, indicator_set.sma200)
        if extension >= minimum:
            entries.append(entry(
                history[i], ProtocolEntryCategory.UNCERTAIN, f"Extended {extension}% above SMA(200)",
            ))
    return entries


def _extension_above_sma50(history: QuotationHistory, index: int) -> Decimal | None:
    indicator_set = history.indicator_at(index)
    if indicator_set is None or indicator_set.sma50 == ZERO:
        return None
    return percent_change(history[index].close, indicator_set.sma50)


def extended_one_year(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days whose extension above the 50-day SMA is among the largest of the trailing year.

    The extensions of the day and the older days of the trailing year are
    ranked; the day is flagged if it exceeds the value that the chosen
    percentile of them does not exceed.
    """
    days = thresholds.extended_one_year_days
    entries = []
    for i in walk(start_date, history):
        extension = _extension_above_sma50(history, i)
        if extension is None:
            continue

        trailing_year = []
        for j in range(i, min(i + days, len(history))):
            value = _extension_above_sma50(history, j)
            if value is not None:
                trailing_year.append(value)

        if extension > percentile_threshold(trailing_year, thresholds.extended_one_year_percentile):
            entries.append(entry(
                history[i], ProtocolEntryCategory.UNCERTAIN, f"Extended {extension}% above SMA(50), one-year extreme",
            ))
    return entries
