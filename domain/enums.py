from enum import Enum


class Currency(str, Enum):
    """Currency a quotation is traded in."""
    USD = "USD"
    CAD = "CAD"
    EUR = "EUR"
    GBP = "GBP"  # quoted in pence (GBp) by most feeds


class ProtocolEntryCategory(str, Enum):
    """Category of a health check finding."""
    CONFIRMATION = "confirmation"
    VIOLATION = "violation"
    UNCERTAIN = "uncertain"


class HealthCheckProfile(str, Enum):
    """Named bundle of health check rules."""
    CONFIRMATIONS = "confirmations"
    SELLING_INTO_STRENGTH = "selling_into_strength"
    SELLING_INTO_WEAKNESS = "selling_into_weakness"
    AFTER_BREAKOUT = "after_breakout"
    DISTRIBUTION = "distribution"
