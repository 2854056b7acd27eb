"""Bollinger BandWidth indicator."""

from decimal import Decimal

from domain.indicators.moving_averages import simple_moving_average
from domain.indicators.statistics import band_width_threshold, standard_deviation
from domain.indicators.utils import HUNDRED, ZERO, round_half_up, to_decimal
from domain.quotations import Quotation, QuotationHistory


def bollinger_bands(
    days: int,
    std_dev: float | Decimal,
    quotation: Quotation,
    history: QuotationHistory,
) -> tuple[Decimal, Decimal, Decimal] | None:
    """Calculate the Bollinger Bands of a quotation.

    Upper Band = SMA + (std_dev * standard_deviation)
    Middle Band = SMA
    Lower Band = SMA - (std_dev * standard_deviation)

    Args:
        days: Period for SMA and standard deviation
        std_dev: Number of standard deviations for the bands
        quotation: Quotation the window starts at
        history: Quotation history containing the quotation

    Returns:
        Tuple of (upper_band, middle_band, lower_band), or None if the window is incomplete
    """
    window = history.window(history.index_of(quotation), days)
    if window is None:
        return None

    deviation = standard_deviation([q.close for q in window])
    middle_band = simple_moving_average(days, quotation, history)
    multiplier = to_decimal(std_dev)

    return (middle_band + deviation * multiplier, middle_band, middle_band - deviation * multiplier)


def bollinger_band_width(
    days: int,
    std_dev: float | Decimal,
    quotation: Quotation,
    history: QuotationHistory,
) -> Decimal:
    """Calculate the Bollinger BandWidth.

    BandWidth = (Upper Band - Lower Band) / Middle Band * 100

    Returns:
        BandWidth rounded to 2 decimals; 0 if the window is incomplete or
        either the standard deviation or the SMA is zero

    Example:
        >>> # ten identical closes
        >>> bollinger_band_width(10, 2, history.most_recent, history)
        Decimal('0')
    """
    bands = bollinger_bands(days, std_dev, quotation, history)
    if bands is None:
        return ZERO

    upper_band, middle_band, lower_band = bands
    # Equal bands mean zero deviation
    if upper_band == lower_band or middle_band == ZERO:
        return ZERO

    return round_half_up((upper_band - lower_band) / middle_band * HUNDRED, 2)


def bollinger_band_width_threshold(
    days: int,
    std_dev: float | Decimal,
    percent: int,
    quotation: Quotation,
    history: QuotationHistory,
) -> Decimal:
    """Calculate the BandWidth level that `percent` of the historical BandWidth values do not exceed.

    All BandWidth values from the quotation back to the oldest complete window
    are collected; zero values (unavailable) are ignored.

    Returns:
        Threshold BandWidth, or 0 if no complete window exists
    """
    index = history.index_of(quotation)
    if index + days > len(history):
        return ZERO

    band_widths = []
    for i in range(index, len(history) - days + 1):
        band_width = bollinger_band_width(days, std_dev, history[i], history)
        if band_width > ZERO:
            band_widths.append(band_width)

    return band_width_threshold(band_widths, percent)
