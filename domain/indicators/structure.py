"""Structural indicators: 52-week range, base length, volume profile and liquidity."""

from decimal import Decimal

from domain.enums import Currency
from domain.indicators.moving_averages import simple_moving_average, simple_moving_average_volume
from domain.indicators.performance import performance
from domain.indicators.utils import HUNDRED, ZERO, percent_change, round_half_up
from domain.quotations import Quotation, QuotationHistory

TRADING_DAYS_PER_YEAR = 252
TRADING_DAYS_PER_WEEK = 5

# A base ends once the close drops more than this below the 52-week high
BASE_TOLERANCE_PERCENT = Decimal("-5")


def _trailing_year(quotation: Quotation, history: QuotationHistory) -> tuple[int, list[Quotation]]:
    index = history.index_of(quotation)
    days = min(TRADING_DAYS_PER_YEAR, len(history) - index)
    return index, history.window(index, days)


def distance_to_52_week_high(quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the percent distance of the close to the highest close of the trailing year.

    Uses up to 252 bars starting at the quotation; fewer if the history is shorter.

    Returns:
        Distance in percent (zero or negative), 2 decimals

    Example:
        >>> # close 90, highest close of the year 100
        >>> distance_to_52_week_high(history.most_recent, history)
        Decimal('-10.00')
    """
    _, window = _trailing_year(quotation, history)
    highest_close = max(q.close for q in window)
    return percent_change(quotation.close, highest_close)


def distance_to_52_week_low(quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the percent distance of the close to the lowest close of the trailing year.

    Returns:
        Distance in percent (zero or positive), 2 decimals
    """
    _, window = _trailing_year(quotation, history)
    lowest_close = min(q.close for q in window)
    return percent_change(quotation.close, lowest_close)


def base_length_weeks(quotation: Quotation, history: QuotationHistory) -> int:
    """Calculate the length in weeks of the base since the last 52-week high.

    The base starts on the last day, counted from the 52-week high toward the
    quotation, on which the close was still within 5% of the high. Its length
    is the number of trading days from there to the quotation, divided by 5
    and rounded half-up.

    Returns:
        Base length in weeks; 0 if the quotation trades within 5% of its high
        since the high was made
    """
    index, window = _trailing_year(quotation, history)

    high_offset = max(range(len(window)), key=lambda i: window[i].close)
    high_index = index + high_offset
    high_quotation = history[high_index]

    base_start = high_index
    for i in range(high_index - 1, index - 1, -1):
        if performance(history[i], high_quotation) < BASE_TOLERANCE_PERCENT:
            break
        base_start = i

    days = base_start - index
    return int(round_half_up(Decimal(days) / TRADING_DAYS_PER_WEEK, 0))


def up_down_volume_ratio(days: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the ratio of up-day volume to down-day volume.

    A day is an up (down) day if it closes above (below) the previous close;
    unchanged days count for neither side.

    Args:
        days: Number of days in the window
        quotation: Quotation the window starts at
        history: Quotation history containing the quotation

    Returns:
        Ratio rounded to 2 decimals; 0 if the window plus one previous bar is
        unavailable or there was no down volume
    """
    window = history.window(history.index_of(quotation), days + 1)
    if days <= 0 or window is None:
        return ZERO

    up_volume = 0
    down_volume = 0
    for current, previous in zip(window[:-1], window[1:]):
        if current.close > previous.close:
            up_volume += current.volume
        elif current.close < previous.close:
            down_volume += current.volume

    if down_volume == 0:
        return ZERO

    return round_half_up(Decimal(up_volume) / Decimal(down_volume), 2)


def volume_differential(days_long: int, days_short: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the percent difference of the short-term over the long-term average volume.

    Example:
        >>> # SMA volume(30) = 1000, SMA volume(5) = 800
        >>> volume_differential(30, 5, history.most_recent, history)
        Decimal('-20.00')

    Returns:
        Differential in percent, 2 decimals; 0 if the long-term average is 0
    """
    long_average = simple_moving_average_volume(days_long, quotation, history)
    if long_average == 0:
        return ZERO

    short_average = simple_moving_average_volume(days_short, quotation, history)
    return percent_change(Decimal(short_average), Decimal(long_average))


def liquidity(days: int, quotation: Quotation, history: QuotationHistory) -> Decimal:
    """Calculate the average daily traded value.

    Liquidity = SMA(close) * SMA(volume)

    Instruments quoted in GBP are quoted in pence; their liquidity is divided
    by 100 to express it in pounds.

    Returns:
        Liquidity rounded to an integral Decimal, 0 if the window is incomplete
    """
    average_price = simple_moving_average(days, quotation, history)
    average_volume = simple_moving_average_volume(days, quotation, history)
    if average_price == ZERO or average_volume == 0:
        return ZERO

    value = average_price * average_volume
    if quotation.currency == Currency.GBP:
        value = value / HUNDRED

    return round_half_up(value, 0)
