"""Price performance indicators."""

from decimal import Decimal

from domain.indicators.utils import ZERO, percent_change
from domain.quotations import Quotation, QuotationHistory

TRADING_DAYS_PER_MONTH = 21

# Month horizons of the RS percent sum; the 3-month horizon is counted twice
RS_PERCENT_SUM_MONTHS = (3, 3, 6, 9, 12)


def performance(current: Quotation, previous: Quotation) -> Decimal:
    """Calculate the percentage performance of one quotation against an older one.

    The close ratio is carried at 4 decimals, the result at 2 decimals.

    Example:
        >>> performance(quotation_at_105, quotation_at_100)
        Decimal('5.00')
    """
    return percent_change(current.close, previous.close)


def performance_n_days(days: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the performance of a quotation against the quotation `days` bars older.

    Returns:
        Performance in percent, or 0 if the older quotation does not exist
    """
    index = history.index_of(quotation)
    if days <= 0 or index + days >= len(history):
        return ZERO

    return percent_change(quotation.close, history[index + days].close)


def rs_percent_sum(quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the weighted multi-horizon performance used for RS ranking.

    RS percent sum = 2 * perf(3 months) + perf(6 months) + perf(9 months) + perf(12 months)

    A month is 21 trading days; each horizon compares against the bar
    `21 * months - 1` bars older so that a 252 bar history covers 12 months.
    Horizons without enough history contribute 0.
    """
    return sum(
        (performance_n_days(TRADING_DAYS_PER_MONTH * months - 1, quotation, history)
         for months in RS_PERCENT_SUM_MONTHS),
        ZERO,
    )


def is_up_day(history: QuotationHistory, index: int) -> bool:
    """True if the close at index is above the previous day's close."""
    if index + 1 >= len(history):
        return False
    return performance(history[index], history[index + 1]) > ZERO


def is_down_day(history: QuotationHistory, index: int) -> bool:
    """True if the close at index is below the previous day's close."""
    if index + 1 >= len(history):
        return False
    return performance(history[index], history[index + 1]) < ZERO
