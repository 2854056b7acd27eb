"""Technical indicators calculated on a quotation history.

All window calculations start at a quotation and walk toward older data.
A window that cannot be filled yields 0, which callers treat as
"indicator unavailable". Prices are exact decimals rounded half-up.

Indicators:
    - Moving Averages: SMA and EMA of the close, SMA of the volume
    - Bollinger: bands, BandWidth and BandWidth threshold
    - Stochastic: Stochastic and Slow Stochastic
    - ATR: True Range and Average True Range Percent
    - Performance: day and N-day performance, RS percent sum
    - Structure: 52-week distances, base length, up/down volume ratio,
      volume differential, liquidity
    - Ranking: RS numbers across a population

Example:
    >>> from domain.indicators import calculate_history, simple_moving_average
    >>>
    >>> calculate_history(history)
    >>> simple_moving_average(50, history.most_recent, history)
"""

from domain.indicators.atr import average_true_range_percent, true_range
from domain.indicators.base import IndicatorSet
from domain.indicators.bollinger import (
    bollinger_band_width,
    bollinger_band_width_threshold,
    bollinger_bands,
)
from domain.indicators.calculation import (
    calculate_history,
    calculate_indicators,
    calculate_most_recent,
)
from domain.indicators.moving_averages import (
    exponential_moving_average,
    simple_moving_average,
    simple_moving_average_volume,
)
from domain.indicators.performance import (
    is_down_day,
    is_up_day,
    performance,
    performance_n_days,
    rs_percent_sum,
)
from domain.indicators.ranking import RankingMetric, rank_by, rank_numbers, rank_population
from domain.indicators.statistics import band_width_threshold, percentile_threshold, standard_deviation
from domain.indicators.stochastic import slow_stochastic, stochastic
from domain.indicators.structure import (
    base_length_weeks,
    distance_to_52_week_high,
    distance_to_52_week_low,
    liquidity,
    up_down_volume_ratio,
    volume_differential,
)
from domain.indicators.utils import crossed_below, percent_change, round_half_up

__all__ = [
    # Indicator set
    "IndicatorSet",
    "calculate_history",
    "calculate_indicators",
    "calculate_most_recent",
    # Moving averages
    "simple_moving_average",
    "exponential_moving_average",
    "simple_moving_average_volume",
    # Volatility
    "standard_deviation",
    "bollinger_bands",
    "bollinger_band_width",
    "bollinger_band_width_threshold",
    "band_width_threshold",
    "percentile_threshold",
    "true_range",
    "average_true_range_percent",
    # Oscillators
    "stochastic",
    "slow_stochastic",
    # Performance
    "performance",
    "performance_n_days",
    "rs_percent_sum",
    "is_up_day",
    "is_down_day",
    # Structure
    "distance_to_52_week_high",
    "distance_to_52_week_low",
    "base_length_weeks",
    "up_down_volume_ratio",
    "volume_differential",
    "liquidity",
    # Ranking
    "RankingMetric",
    "rank_numbers",
    "rank_by",
    "rank_population",
    # Utils
    "round_half_up",
    "percent_change",
    "crossed_below",
]
