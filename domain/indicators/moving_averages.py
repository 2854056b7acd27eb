"""Moving average indicators."""

from decimal import Decimal

from domain.indicators.utils import ZERO, round_half_up
from domain.quotations import Quotation, QuotationHistory


def simple_moving_average(days: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the Simple Moving Average of the closing price.

    Args:
        days: Number of trading days in the window
        quotation: Quotation the window starts at (inclusive, walking toward older data)
        history: Quotation history containing the quotation

    Returns:
        SMA rounded to 3 decimals, or 0 if fewer than `days` bars are available

    Example:
        >>> # closes 100..109, newest is 109
        >>> simple_moving_average(5, history.most_recent, history)
        Decimal('107.000')
    """
    window = history.window(history.index_of(quotation), days)
    if window is None:
        return ZERO

    total = sum((q.close for q in window), ZERO)
    return round_half_up(total / days, 3)


def exponential_moving_average(days: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the Exponential Moving Average of the closing price.

    The EMA is seeded with the SMA of the window that ends `days` bars before
    the quotation. The recurrence with multiplier 2/(days+1) is then applied
    from the seed toward the quotation, oldest to newest.

    Args:
        days: Number of trading days of the EMA
        quotation: Quotation to calculate the EMA for
        history: Quotation history containing the quotation

    Returns:
        EMA rounded to 3 decimals, or 0 if fewer than 2*days bars are available
    """
    index = history.index_of(quotation)
    if days <= 0 or index + days * 2 > len(history):
        return ZERO

    seed_index = index + days
    ema = simple_moving_average(days, history[seed_index], history)
    multiplier = Decimal(2) / Decimal(days + 1)

    for i in range(seed_index - 1, index - 1, -1):
        ema = multiplier * (history[i].close - ema) + ema

    return round_half_up(ema, 3)


def simple_moving_average_volume(days: int, quotation: Quotation, history: QuotationHistory) -> int:
    """Calculate the Simple Moving Average of the volume.

    Returns:
        Average volume rounded half-up to an integer, or 0 if the window is incomplete
    """
    window = history.window(history.index_of(quotation), days)
    if window is None:
        return 0

    total = sum(q.volume for q in window)
    return int(round_half_up(Decimal(total) / days, 0))
