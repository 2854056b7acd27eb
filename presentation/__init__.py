from .json_api import (
    ProtocolEntryResponse,
    ProtocolResponse,
    DateGroupResponse,
    DateBasedProtocolResponse,
    IndicatorSetResponse,
    to_protocol_response,
    to_date_based_protocol,
    to_indicator_response,
    to_json,
)
from .text import format_indicators, format_protocol

__all__ = [
    # JSON API
    "ProtocolEntryResponse",
    "ProtocolResponse",
    "DateGroupResponse",
    "DateBasedProtocolResponse",
    "IndicatorSetResponse",
    "to_protocol_response",
    "to_date_based_protocol",
    "to_indicator_response",
    "to_json",
    # Plain text
    "format_indicators",
    "format_protocol",
]
