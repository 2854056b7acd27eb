"""
Counting rules.

Counting rules compare the number of good and bad closes, or up and down
days, from the start date up to each following day.
"""

from collections.abc import Iterator
from datetime import date

from config.schema import HealthCheckThresholds
from domain.enums import ProtocolEntryCategory
from domain.healthcheck.base import DEFAULT_THRESHOLDS, entry, median_price, moving_averages, start_index, walk
from domain.indicators.performance import performance
from domain.indicators.utils import ZERO
from domain.protocol import ProtocolEntry
from domain.quotations import QuotationHistory


# ============================================================================
# Counters
# ============================================================================

def is_good_close(history: QuotationHistory, index: int) -> bool:
    """A close above the middle of the day's range is good; exactly the middle is bad."""
    quotation = history[index]
    return quotation.close > median_price(quotation)


def good_bad_close_counts(start: int, history: QuotationHistory) -> Iterator[tuple[int, int, int, int]]:
    """
    Running good/bad close counts from the start index toward the most recent day.

    Yields:
        (index, good closes, bad closes, days total) for every day after the
        start day, each count covering the start day up to that day
    """
    good = bad = 0
    for i in range(start, -1, -1):
        if is_good_close(history, i):
            good += 1
        else:
            bad += 1

        if i != start:
            yield i, good, bad, good + bad


def up_down_day_counts(start: int, history: QuotationHistory) -> Iterator[tuple[int, int, int, int]]:
    """
    Running up/down day counts from the start index toward the most recent day.

    The oldest quotation of the history has no previous close and is not counted.

    Yields:
        (index, up days, down days, days total) for every day after the start day
    """
    up = down = total = 0
    for i in range(start, -1, -1):
        if i + 1 < len(history):
            change = performance(history[i], history[i + 1])
            if change > ZERO:
                up += 1
            elif change < ZERO:
                down += 1
            total += 1

        if i != start:
            yield i, up, down, total


def is_consecutive_closes(history: QuotationHistory, index: int, days: int, lower: bool) -> bool:
    """
    Check for `days` lower (or higher) closes in a row on above-average volume.

    The days from index toward older data must each close below (above) the
    previous close with volume above their 30-day average volume, and their
    total volume must exceed the total of those averages. Days without a
    volume average are not counted.
    """
    if index + days >= len(history):
        return False

    count = 0
    volume_sum = 0
    average_volume_sum = 0
    for j in range(index, index + days):
        indicator_set = moving_averages(history, j)
        if indicator_set is None:
            continue

        change = performance(history[j], history[j + 1])
        in_direction = change < ZERO if lower else change > ZERO
        if in_direction and history[j].volume > indicator_set.sma30_volume:
            count += 1
            volume_sum += history[j].volume
            average_volume_sum += indicator_set.sma30_volume

    return count == days and volume_sum > average_volume_sum


# ============================================================================
# Rules
# ============================================================================

def more_bad_than_good_closes(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag every day on which bad closes outnumber good closes since the start date."""
    entries = []
    for i, good, bad, total in good_bad_close_counts(start_index(start_date, history), history):
        if bad > good:
            entries.append(entry(
                history[i], ProtocolEntryCategory.VIOLATION,
                f"More bad closes than good closes: {bad} of {total} days",
            ))
    return entries


def more_good_than_bad_closes(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag every day on which good closes outnumber bad closes since the start date."""
    entries = []
    for i, good, bad, total in good_bad_close_counts(start_index(start_date, history), history):
        if good > bad:
            entries.append(entry(
                history[i], ProtocolEntryCategory.CONFIRMATION,
                f"More good closes than bad closes: {good} of {total} days",
            ))
    return entries


def more_down_than_up_days(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag every day on which down days outnumber up days since the start date."""
    entries = []
    for i, up, down, total in up_down_day_counts(start_index(start_date, history), history):
        if down > up:
            entries.append(entry(
                history[i], ProtocolEntryCategory.VIOLATION,
                f"More down days than up days: {down} of {total} days",
            ))
    return entries


def more_up_than_down_days(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag every day on which up days outnumber down days since the start date."""
    entries = []
    for i, up, down, total in up_down_day_counts(start_index(start_date, history), history):
        if up > down:
            entries.append(entry(
                history[i], ProtocolEntryCategory.CONFIRMATION,
                f"More up days than down days: {up} of {total} days",
            ))
    return entries


def three_lower_closes(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag lower closes in a row on above-average volume."""
    days = thresholds.consecutive_closes
    return [
        entry(history[i], ProtocolEntryCategory.VIOLATION, f"{days} lower closes on above-average volume")
        for i in walk(start_date, history)
        if is_consecutive_closes(history, i, days, lower=True)
    ]


def three_higher_closes(
    start_date: date,
    history: QuotationHistory,
    thresholds: HealthCheckThresholds = DEFAULT_THRESHOLDS,
) -> list[ProtocolEntry]:
    """Flag higher closes in a row on above-average volume."""
    days = thresholds.consecutive_closes
    return [
        entry(history[i], ProtocolEntryCategory.CONFIRMATION, f"{days} higher closes on above-average volume")
        for i in walk(start_date, history)
        if is_consecutive_closes(history, i, days, lower=False)
    ]
