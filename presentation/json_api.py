"""
JSON API response types.

Structured responses for health check protocols and indicator sets.
Can be used with FastAPI, Flask, or any web framework.
"""

from datetime import date, datetime
import datetime as _dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from domain import Protocol, ProtocolEntry, ProtocolEntryCategory
from domain.indicators import IndicatorSet


# ============================================================================
# Response Models
# ============================================================================

class ProtocolEntryResponse(BaseModel):
    """API response for a single finding."""
    date: date
    category: str
    text: str


class ProtocolResponse(BaseModel):
    """API response for a health check protocol."""
    generated_at: datetime = Field(default_factory=datetime.now)
    symbol: str | None = None
    profile: str | None = None
    entries: list[ProtocolEntryResponse]
    total_entries: int
    confirmation_percentage: int
    violation_percentage: int
    uncertain_percentage: int


class DateGroupResponse(BaseModel):
    """Findings of one day with the shares of that day."""
    date: date
    entries: list[ProtocolEntryResponse]
    confirmation_percentage: int
    violation_percentage: int
    uncertain_percentage: int


class DateBasedProtocolResponse(BaseModel):
    """API response for a protocol grouped by day."""
    generated_at: datetime = Field(default_factory=datetime.now)
    symbol: str | None = None
    profile: str | None = None
    dates: list[DateGroupResponse]


class IndicatorSetResponse(BaseModel):
    """API response for the indicators of one quotation."""
    date: _dt.date | None = None
    symbol: str | None = None

    sma10: Decimal
    sma20: Decimal
    sma50: Decimal
    sma150: Decimal
    sma200: Decimal
    ema10: Decimal
    ema21: Decimal
    sma30_volume: int

    bollinger_band_width_10: Decimal
    bollinger_band_width_10_weeks: Decimal
    bollinger_band_width_threshold: Decimal
    atrp_20: Decimal

    stochastic_14: Decimal
    slow_stochastic_14: Decimal

    performance_5_days: Decimal
    rs_percent_sum: Decimal
    rs_number: int
    rs_number_distance_52w_high: int
    rs_number_up_down_volume_ratio: int

    base_length_weeks: int
    volume_differential_5_days: Decimal
    distance_to_52w_high: Decimal
    distance_to_52w_low: Decimal
    up_down_volume_ratio: Decimal
    liquidity_20_days: Decimal


# ============================================================================
# Conversion Functions
# ============================================================================

def _entry_to_response(entry: ProtocolEntry) -> ProtocolEntryResponse:
    """Convert ProtocolEntry to API response."""
    return ProtocolEntryResponse(
        date=entry.date,
        category=entry.category.value,
        text=entry.text,
    )


def to_protocol_response(
    protocol: Protocol,
    symbol: str | None = None,
    profile: str | None = None,
) -> ProtocolResponse:
    """
    Convert a Protocol to API response.

    Args:
        protocol: Sorted protocol with calculated percentages
        symbol: Instrument the protocol belongs to
        profile: Profile that produced the protocol, None for the merged core profiles

    Returns:
        Structured API response
    """
    return ProtocolResponse(
        symbol=symbol,
        profile=profile,
        entries=[_entry_to_response(e) for e in protocol],
        total_entries=len(protocol),
        confirmation_percentage=protocol.confirmation_percentage,
        violation_percentage=protocol.violation_percentage,
        uncertain_percentage=protocol.uncertain_percentage,
    )


def to_date_based_protocol(
    protocol: Protocol,
    symbol: str | None = None,
    profile: str | None = None,
) -> DateBasedProtocolResponse:
    """
    Group the findings of a protocol by day.

    Each day carries the category shares among its own findings.
    Days are kept in protocol order (ascending after sorting).
    """
    groups = []
    for day in protocol.dates():
        day_protocol = Protocol(protocol.entries_of_date(day))
        day_protocol.calculate_percentages()
        groups.append(DateGroupResponse(
            date=day,
            entries=[_entry_to_response(e) for e in day_protocol],
            confirmation_percentage=day_protocol.percentage(ProtocolEntryCategory.CONFIRMATION),
            violation_percentage=day_protocol.percentage(ProtocolEntryCategory.VIOLATION),
            uncertain_percentage=day_protocol.percentage(ProtocolEntryCategory.UNCERTAIN),
        ))

    return DateBasedProtocolResponse(symbol=symbol, profile=profile, dates=groups)


def to_indicator_response(
    indicator_set: IndicatorSet,
    day: date | None = None,
    symbol: str | None = None,
) -> IndicatorSetResponse:
    """Convert an IndicatorSet to API response."""
    values = indicator_set.to_dict()
    values.pop("is_most_recent", None)
    return IndicatorSetResponse(date=day, symbol=symbol, **values)


def to_json(response: BaseModel) -> dict[str, Any]:
    """
    Convert a response model to a JSON-serializable dict.

    Decimals are serialized as strings to keep their exact value.

    Args:
        response: Any response model of this module

    Returns:
        JSON-serializable dictionary
    """
    return response.model_dump(mode="json")
