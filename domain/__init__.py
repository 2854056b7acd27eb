from .enums import Currency, ProtocolEntryCategory, HealthCheckProfile
from .errors import (
    ErrorCode,
    HealthCheckError,
    NoDataAfterDate,
    DuplicateQuotationError,
    QuotationNotFoundError,
    UnknownRuleError,
)
from .quotations import Quotation, QuotationHistory
from .protocol import Protocol, ProtocolEntry

__all__ = [
    # Enums
    "Currency",
    "ProtocolEntryCategory",
    "HealthCheckProfile",
    # Errors
    "ErrorCode",
    "HealthCheckError",
    "NoDataAfterDate",
    "DuplicateQuotationError",
    "QuotationNotFoundError",
    "UnknownRuleError",
    # Quotations
    "Quotation",
    "QuotationHistory",
    # Protocol
    "Protocol",
    "ProtocolEntry",
]
