"""Indicator set attached to each quotation."""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any

from domain.indicators.utils import ZERO


@dataclass
class IndicatorSet:
    """Indicator snapshot of one quotation.

    Historical quotations only carry the moving averages; the most recent
    quotation of a history carries the full set. A value of zero means the
    indicator could not be calculated for lack of history.

    Example:
        >>> indicators = IndicatorSet(sma50=Decimal("101.250"), sma30_volume=250000)
        >>> indicators.has_moving_averages
        True
    """

    # Moving averages
    sma10: Decimal = ZERO
    sma20: Decimal = ZERO
    sma50: Decimal = ZERO
    sma150: Decimal = ZERO
    sma200: Decimal = ZERO
    ema10: Decimal = ZERO
    ema21: Decimal = ZERO
    sma30_volume: int = 0

    # Volatility
    bollinger_band_width_10: Decimal = ZERO
    bollinger_band_width_10_weeks: Decimal = ZERO
    bollinger_band_width_threshold: Decimal = ZERO
    atrp_20: Decimal = ZERO

    # Oscillators
    stochastic_14: Decimal = ZERO
    slow_stochastic_14: Decimal = ZERO

    # Performance
    performance_5_days: Decimal = ZERO
    rs_percent_sum: Decimal = ZERO

    # Relative strength ranks (0-100, assigned across a population)
    rs_number: int = 0
    rs_number_distance_52w_high: int = 0
    rs_number_up_down_volume_ratio: int = 0

    # Structure
    base_length_weeks: int = 0
    volume_differential_5_days: Decimal = ZERO
    distance_to_52w_high: Decimal = ZERO
    distance_to_52w_low: Decimal = ZERO
    up_down_volume_ratio: Decimal = ZERO
    liquidity_20_days: Decimal = ZERO

    is_most_recent: bool = field(default=False, compare=False)

    @property
    def has_moving_averages(self) -> bool:
        """True if at least the shortest moving average could be calculated."""
        return self.sma10 != ZERO

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary (decimals kept as Decimal)."""
        return asdict(self)
