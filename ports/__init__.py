from .sources import (
    QuotationSource,
    QuotationSourceError,
    ErrorCode,
)

__all__ = [
    "QuotationSource",
    "QuotationSourceError",
    "ErrorCode",
]
