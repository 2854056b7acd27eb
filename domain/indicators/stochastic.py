"""Stochastic Oscillator indicator."""

from decimal import Decimal

from domain.indicators.utils import HUNDRED, ZERO, round_half_up
from domain.quotations import Quotation, QuotationHistory


def stochastic(days: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the Stochastic Oscillator (%K).

    %K = (Close - Lowest Low) / (Highest High - Lowest Low) * 100

    Args:
        days: Lookback period for the high/low range
        quotation: Quotation the window starts at
        history: Quotation history containing the quotation

    Returns:
        %K rounded to 2 decimals (0-100); 0 if the window is incomplete or the range is zero

    Example:
        >>> # close at the top of the 14-day range
        >>> stochastic(14, history.most_recent, history)
        Decimal('100.00')
    """
    window = history.window(history.index_of(quotation), days)
    if window is None:
        return ZERO

    lowest_low = min(q.low for q in window)
    highest_high = max(q.high for q in window)
    price_range = highest_high - lowest_low
    if price_range == ZERO:
        return ZERO

    return round_half_up((quotation.close - lowest_low) / price_range * HUNDRED, 2)


def slow_stochastic(
    days: int,
    quotation: Quotation,
    history: QuotationHistory,
    smoothing: int = 3,
) -> Decimal:
    """Calculate the Slow Stochastic.

    Average of the Stochastic of the quotation and the `smoothing - 1` days
    before it.

    Returns:
        Slow Stochastic rounded to 2 decimals, or 0 if fewer than
        days + smoothing bars are available from the quotation on
    """
    index = history.index_of(quotation)
    if smoothing <= 0 or index + days + smoothing > len(history):
        return ZERO

    total = sum((stochastic(days, history[i], history) for i in range(index, index + smoothing)), ZERO)
    return round_half_up(total / smoothing, 2)
