"""Average True Range Percent indicator."""

from decimal import Decimal

from domain.indicators.utils import HUNDRED, ZERO, round_half_up
from domain.quotations import Quotation, QuotationHistory


def true_range(quotation: Quotation, previous: Quotation) -> Decimal:
    """Calculate the True Range of a day.

    True Range = max(high - low, |high - previous close|, |low - previous close|)

    Returns:
        True Range rounded to 2 decimals
    """
    value = max(
        quotation.high - quotation.low,
        abs(quotation.high - previous.close),
        abs(quotation.low - previous.close),
    )
    return round_half_up(value, 2)


def average_true_range_percent(days: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the Average True Range Percent (ATRP).

    ATR = mean True Range over `days`
    ATRP = ATR / Close * 100

    Args:
        days: Number of True Range values to average
        quotation: Quotation the window starts at
        history: Quotation history containing the quotation

    Returns:
        ATRP rounded to 2 decimals, or 0 if the window or the close preceding
        its oldest day is missing

    Example:
        >>> # high-low range of 2 on every day, close of 100, no gaps
        >>> average_true_range_percent(20, history.most_recent, history)
        Decimal('2.00')
    """
    index = history.index_of(quotation)
    # One additional bar provides the previous close of the oldest window day
    window = history.window(index, days + 1)
    if days <= 0 or window is None:
        return ZERO

    total = sum((true_range(window[i], window[i + 1]) for i in range(days)), ZERO)
    average_true_range = total / days

    return round_half_up(average_true_range / quotation.close * HUNDRED, 2)
