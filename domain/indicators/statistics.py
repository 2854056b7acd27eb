"""Descriptive statistics used by the volatility indicators."""

from collections.abc import Sequence
from decimal import Decimal

from domain.indicators.utils import ZERO, round_half_up


def standard_deviation(values: Sequence[Decimal]) -> Decimal:
    """Calculate the population standard deviation.

    Args:
        values: Values of the sample (divided by N, not N-1)

    Returns:
        Standard deviation rounded to 4 decimals, 0 for an empty sequence

    Example:
        >>> standard_deviation([Decimal(v) for v in (46, 69, 32, 60, 52, 41)])
        Decimal('12.1518')

    Notes:
        - Four decimals keep the bands of low priced instruments from collapsing to zero
    """
    if not values:
        return ZERO

    count = len(values)
    mean = sum(values, ZERO) / count
    sum_of_squares = sum(((v - mean) ** 2 for v in values), ZERO)
    variance = sum_of_squares / count

    return round_half_up(variance.sqrt(), 4)


def percentile_threshold(values: Sequence[Decimal], percent: int) -> Decimal:
    """Find the value below which the lowest `percent` of values lie.

    Values are sorted descending; the threshold sits at index
    `size - size * percent // 100 - 1`.

    Returns:
        Threshold value, 0 for an empty sequence
    """
    if not values:
        return ZERO

    ordered = sorted(values, reverse=True)
    size = len(ordered)
    threshold_index = size - size * percent // 100 - 1

    return ordered[max(threshold_index, 0)]


def band_width_threshold(band_widths: Sequence[Decimal], percent: int) -> Decimal:
    """Find the Bollinger BandWidth below which the lowest `percent` of values lie.

    Args:
        band_widths: BandWidth values, any order
        percent: Share of the lowest values, 0-100

    Returns:
        Threshold value, 0 for an empty sequence

    Example:
        >>> band_width_threshold([Decimal(v) for v in range(1, 21)], 25)
        Decimal('6')
    """
    return percentile_threshold(band_widths, percent)
