"""
Quotation source ports and error types.

This module defines the protocol for quotation source adapters
and error types with context-rich messages.
"""

from abc import abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from domain.enums import Currency
from domain.quotations import QuotationHistory


# ============================================================================
# Error Codes
# ============================================================================

class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # File errors (1xx)
    FILE_NOT_FOUND = "E101"
    FILE_UNREADABLE = "E102"

    # Parse errors (3xx)
    PARSE_CSV = "E303"
    PARSE_DATE = "E304"
    PARSE_NUMBER = "E305"

    # Data errors (4xx)
    DATA_MISSING = "E401"
    DATA_INVALID = "E402"
    DATA_EMPTY = "E404"
    DATA_DUPLICATE = "E405"

    # Internal errors (9xx)
    INTERNAL = "E901"


# ============================================================================
# Errors
# ============================================================================

class QuotationSourceError(Exception):
    """
    Base error for quotation source adapters.

    Attributes:
        code: Structured error code
        source: Name of the source (usually the file path)
        context: Additional context (row number, column, ...)
        cause: Original exception if any
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL,
        source: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.source = source
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now()

        parts = [f"[{code.value}]"]
        if source:
            parts.append(f"[{source}]")
        parts.append(message)

        self.message = message
        super().__init__(" ".join(parts))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "source": self.source,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }

    @classmethod
    def missing_column(cls, source: str, column: str) -> "QuotationSourceError":
        """Create error for a missing required column."""
        return cls(
            f"Missing required column: {column}",
            code=ErrorCode.DATA_MISSING,
            source=source,
            context={"column": column},
        )

    @classmethod
    def empty(cls, source: str) -> "QuotationSourceError":
        """Create error for a source without quotations."""
        return cls("No quotations", code=ErrorCode.DATA_EMPTY, source=source)


# ============================================================================
# Port
# ============================================================================

@runtime_checkable
class QuotationSource(Protocol):
    """
    Protocol for all quotation source adapters.

    Implementations must:
    - Return a QuotationHistory, never raw rows
    - Fail explicitly with QuotationSourceError, no silent fallbacks
    """

    @property
    def source_name(self) -> str:
        """Unique identifier for this source."""
        ...

    @property
    def currency(self) -> Currency:
        """Currency of the loaded quotations."""
        ...

    @abstractmethod
    def load(self) -> QuotationHistory:
        """
        Load the quotation history.

        Raises:
            QuotationSourceError: If the quotations cannot be read or are invalid
        """
        ...
