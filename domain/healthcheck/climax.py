"""Climax rules: advances too steep to be sustained."""

from datetime import date

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.healthcheck.base import DEFAULT_THRESHOLDS, entry, walk
from domain.indicators.performance import is_up_day, performance_n_days
from domain.indicators.utils import to_decimal
from domain.protocol import ProtocolEntry
from domain.quotations import QuotationHistory

DAYS_ONE_WEEK = 5
DAYS_THREE_WEEKS = 15


def _climax_move(
    start_date: date,
    history: QuotationHistory,
    days: int,
    minimum: float,
    label: str,
) -> list[ProtocolEntry]:
    threshold = to_decimal(minimum)
    entries = []
    for i in walk(start_date, history):
        change = performance_n_days(days, history[i], history)
        if change >= threshold:
            entries.append(entry(history[i], ProtocolEntryCategory.UNCERTAIN, f"Climax move: {change}% in {label}"))
    return entries


def climax_move_one_week(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days whose 5-day performance reaches the one-week climax threshold."""
    return _climax_move(start_date, history, DAYS_ONE_WEEK, thresholds.climax_one_week_percent, "one week")


def climax_move_three_weeks(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag days whose 15-day performance reaches the three-week climax threshold."""
    return _climax_move(start_date, history, DAYS_THREE_WEEKS, thresholds.climax_three_weeks_percent, "three weeks")


def time_climax(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """
    Flag days that end a streak of mostly up days.

    With default thresholds a day is flagged if at least 7 of the 10 days
    ending with it closed higher. Days without a full window plus one
    previous day are skipped.
    """
    days = thresholds.time_climax_days
    entries = []
    for i in walk(start_date, history):
        if i + days >= len(history):
            continue

        up_days = sum(1 for j in range(i, i + days) if is_up_day(history, j))
        if up_days >= thresholds.time_climax_up_days:
            entries.append(entry(
                history[i], ProtocolEntryCategory.UNCERTAIN, f"Time climax: {up_days} up days of the last {days}",
            ))
    return entries
