"""
Domain error types.

Errors raised by the indicator and health check engines carry a stable
error code so that an outer layer can translate them into user-facing
responses without parsing messages.
"""

from datetime import date
from enum import Enum
from typing import Any


# ============================================================================
# Error Codes
# ============================================================================

class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # History errors (1xx)
    NO_DATA_AFTER_DATE = "H101"
    DUPLICATE_QUOTATION = "H102"
    QUOTATION_NOT_FOUND = "H103"

    # Rule engine errors (2xx)
    UNKNOWN_RULE = "H201"
    UNKNOWN_PROFILE = "H202"

    # Internal errors (9xx)
    INTERNAL = "H901"


# ============================================================================
# Error Classes
# ============================================================================

class HealthCheckError(Exception):
    """
    Base exception for indicator and health check failures.

    Provides structured error information for callers and logging.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL,
        context: dict[str, Any] | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.message = message
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context,
        }


class NoDataAfterDate(HealthCheckError):
    """Raised when a health check starts after the newest quotation."""

    def __init__(self, start_date: date, newest_date: date | None = None):
        self.start_date = start_date
        self.newest_date = newest_date

        msg = f"No quotations exist at or after {start_date.isoformat()}"
        context: dict[str, Any] = {"start_date": start_date.isoformat()}
        if newest_date:
            msg += f" (newest quotation is from {newest_date.isoformat()})"
            context["newest_date"] = newest_date.isoformat()

        super().__init__(msg, code=ErrorCode.NO_DATA_AFTER_DATE, context=context)


class DuplicateQuotationError(HealthCheckError):
    """Raised when a history receives two quotations for the same date."""

    def __init__(self, quotation_date: date):
        self.quotation_date = quotation_date
        super().__init__(
            f"Duplicate quotation for {quotation_date.isoformat()}",
            code=ErrorCode.DUPLICATE_QUOTATION,
            context={"date": quotation_date.isoformat()},
        )


class QuotationNotFoundError(HealthCheckError):
    """Raised when a quotation is not part of the history it is looked up in."""

    def __init__(self, quotation_date: date):
        self.quotation_date = quotation_date
        super().__init__(
            f"Quotation of {quotation_date.isoformat()} is not part of the history",
            code=ErrorCode.QUOTATION_NOT_FOUND,
            context={"date": quotation_date.isoformat()},
        )


class UnknownRuleError(HealthCheckError):
    """Raised when a rule or profile name is not registered."""

    def __init__(self, name: str, code: ErrorCode = ErrorCode.UNKNOWN_RULE):
        self.name = name
        super().__init__(f"Unknown health check rule or profile: {name}", code=code, context={"name": name})
