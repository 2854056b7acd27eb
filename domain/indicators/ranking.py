"""Relative strength ranking across a population of instruments."""

from collections.abc import Sequence
from decimal import Decimal
from enum import Enum

from domain.indicators.base import IndicatorSet
from domain.indicators.utils import HUNDRED, round_half_up


class RankingMetric(str, Enum):
    """Metric an RS number is derived from."""
    RS_PERCENT_SUM = "rs_percent_sum"
    DISTANCE_TO_52W_HIGH = "distance_to_52w_high"
    UP_DOWN_VOLUME_RATIO = "up_down_volume_ratio"


# Metric -> IndicatorSet field receiving the rank
RANK_FIELDS: dict[RankingMetric, str] = {
    RankingMetric.RS_PERCENT_SUM: "rs_number",
    RankingMetric.DISTANCE_TO_52W_HIGH: "rs_number_distance_52w_high",
    RankingMetric.UP_DOWN_VOLUME_RATIO: "rs_number_up_down_volume_ratio",
}


def rank_numbers(values: Sequence[Decimal]) -> list[int]:
    """Assign a 0-100 rank to each value, highest value ranked highest.

    Values are sorted descending with a stable sort. The element at sorted
    position i of N receives round((N - i) / N, 2) * 100. Equal values share
    the rank of the first element of their group.

    Args:
        values: Metric values, one per instrument

    Returns:
        Ranks in the order of the input values

    Example:
        >>> rank_numbers([Decimal("34.5"), Decimal("-5"), Decimal("12.35")])
        [100, 33, 67]
    """
    count = len(values)
    order = sorted(range(count), key=lambda i: values[i], reverse=True)

    ranks = [0] * count
    previous_value = None
    previous_rank = 0
    for position, i in enumerate(order):
        if position > 0 and values[i] == previous_value:
            rank = previous_rank
        else:
            fraction = round_half_up(Decimal(count - position) / Decimal(count), 2)
            rank = int(fraction * HUNDRED)
        ranks[i] = rank
        previous_value = values[i]
        previous_rank = rank

    return ranks


def rank_by(indicator_sets: Sequence[IndicatorSet], metric: RankingMetric) -> list[IndicatorSet]:
    """Rank a population by one metric and store the ranks on the indicator sets.

    Args:
        indicator_sets: Most recent indicator sets of the population
        metric: Metric to rank by

    Returns:
        The indicator sets sorted descending by the metric (stable for ties)
    """
    values = [getattr(s, metric.value) for s in indicator_sets]
    ranks = rank_numbers(values)

    target = RANK_FIELDS[metric]
    for indicator_set, rank in zip(indicator_sets, ranks):
        setattr(indicator_set, target, rank)

    return sorted(indicator_sets, key=lambda s: getattr(s, metric.value), reverse=True)


def rank_population(indicator_sets: Sequence[IndicatorSet]) -> None:
    """Assign all three RS numbers to every indicator set of the population."""
    for metric in RankingMetric:
        rank_by(indicator_sets, metric)
