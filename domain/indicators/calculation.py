"""
Indicator calculation orchestration.

Decides per quotation whether the full indicator set (most recent
quotation) or only the moving averages (historical quotations) are
calculated, and attaches the results to the history.
"""

import logging

from config.schema import IndicatorConfig
from domain.indicators.atr import average_true_range_percent
from domain.indicators.base import IndicatorSet
from domain.indicators.bollinger import bollinger_band_width, bollinger_band_width_threshold
from domain.indicators.moving_averages import (
    exponential_moving_average,
    simple_moving_average,
    simple_moving_average_volume,
)
from domain.indicators.performance import performance_n_days, rs_percent_sum
from domain.indicators.stochastic import slow_stochastic, stochastic
from domain.indicators.structure import (
    base_length_weeks,
    distance_to_52_week_high,
    distance_to_52_week_low,
    liquidity,
    up_down_volume_ratio,
    volume_differential,
)
from domain.quotations import Quotation, QuotationHistory

logger = logging.getLogger(__name__)

SMA_DAYS = (10, 20, 50, 150, 200)
EMA_DAYS = (10, 21)
SMA_VOLUME_DAYS = 30


def _fill_moving_averages(indicator_set: IndicatorSet, quotation: Quotation, history: QuotationHistory) -> None:
    for days in SMA_DAYS:
        setattr(indicator_set, f"sma{days}", simple_moving_average(days, quotation, history))
    for days in EMA_DAYS:
        setattr(indicator_set, f"ema{days}", exponential_moving_average(days, quotation, history))
    indicator_set.sma30_volume = simple_moving_average_volume(SMA_VOLUME_DAYS, quotation, history)


def _fill_most_recent(
    indicator_set: IndicatorSet,
    quotation: Quotation,
    history: QuotationHistory,
    config: IndicatorConfig,
) -> None:
    # Volatility
    indicator_set.bollinger_band_width_10 = bollinger_band_width(
        config.bollinger_days, config.bollinger_std_dev, quotation, history
    )
    weekly = history.weekly()
    week_index = weekly.index_of_date(quotation.date)
    if week_index is not None:
        indicator_set.bollinger_band_width_10_weeks = bollinger_band_width(
            config.bollinger_days, config.bollinger_std_dev, weekly[week_index], weekly
        )
    indicator_set.bollinger_band_width_threshold = bollinger_band_width_threshold(
        config.bollinger_days, config.bollinger_std_dev, config.bollinger_threshold_percent, quotation, history
    )
    indicator_set.atrp_20 = average_true_range_percent(config.atrp_days, quotation, history)

    # Oscillators
    indicator_set.stochastic_14 = stochastic(config.stochastic_days, quotation, history)
    indicator_set.slow_stochastic_14 = slow_stochastic(
        config.stochastic_days, quotation, history, smoothing=config.stochastic_smoothing
    )

    # Performance
    indicator_set.performance_5_days = performance_n_days(config.performance_days, quotation, history)
    indicator_set.rs_percent_sum = rs_percent_sum(quotation, history)

    # Structure
    indicator_set.base_length_weeks = base_length_weeks(quotation, history)
    indicator_set.distance_to_52w_high = distance_to_52_week_high(quotation, history)
    indicator_set.distance_to_52w_low = distance_to_52_week_low(quotation, history)
    indicator_set.up_down_volume_ratio = up_down_volume_ratio(config.up_down_volume_days, quotation, history)
    indicator_set.volume_differential_5_days = volume_differential(
        config.volume_differential_long_days, config.volume_differential_short_days, quotation, history
    )
    indicator_set.liquidity_20_days = liquidity(config.liquidity_days, quotation, history)


def calculate_indicators(
    history: QuotationHistory,
    quotation: Quotation,
    most_recent: bool,
    config: IndicatorConfig | None = None,
) -> IndicatorSet | None:
    """
    Calculate the indicator set of one quotation.

    Args:
        history: Quotation history containing the quotation
        quotation: Quotation to calculate indicators for
        most_recent: Calculate the full set instead of the moving averages only
        config: Indicator windows (defaults if omitted)

    Returns:
        A new IndicatorSet, or None if fewer than the minimum number of
        trailing bars exist
    """
    config = config or IndicatorConfig()
    index = history.index_of(quotation)
    if len(history) - index < config.minimum_history_days:
        return None

    indicator_set = IndicatorSet(is_most_recent=most_recent)
    _fill_moving_averages(indicator_set, quotation, history)
    if most_recent:
        _fill_most_recent(indicator_set, quotation, history, config)

    return indicator_set


def calculate_history(history: QuotationHistory, config: IndicatorConfig | None = None) -> int:
    """
    Calculate and attach the indicator sets of all quotations of a history.

    Existing indicator sets are overwritten. The most recent quotation gets
    the full set, all others the moving averages.

    Returns:
        Number of quotations that received an indicator set
    """
    config = config or IndicatorConfig()
    calculated = 0

    for index, quotation in enumerate(history):
        indicator_set = calculate_indicators(history, quotation, index == 0, config)
        history.set_indicator(index, indicator_set)
        if indicator_set is not None:
            calculated += 1

    logger.info(f"Calculated indicators for {calculated} of {len(history)} quotations")
    return calculated


def calculate_most_recent(history: QuotationHistory, config: IndicatorConfig | None = None) -> IndicatorSet | None:
    """Calculate and attach the full indicator set of the most recent quotation only."""
    if history.most_recent is None:
        return None

    indicator_set = calculate_indicators(history, history.most_recent, True, config)
    history.set_indicator(0, indicator_set)
    return indicator_set
