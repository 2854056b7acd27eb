"""Utility functions for indicator calculations."""

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def round_half_up(value: Decimal, places: int) -> Decimal:
    """Round a decimal to the given number of places, ties away from zero.

    Args:
        value: Value to round
        places: Number of decimal places (0 rounds to an integral Decimal)

    Returns:
        Rounded Decimal

    Example:
        >>> round_half_up(Decimal("2.345"), 2)
        Decimal('2.35')
        >>> round_half_up(Decimal("-2.5"), 0)
        Decimal('-3')
    """
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    """Convert a config threshold or literal to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """Calculate the percentage change from previous to current.

    The ratio is carried at 4 decimals before it is scaled to percent and
    rounded to 2 decimals.

    Args:
        current: Newer value
        previous: Older value, must not be zero

    Returns:
        Percentage change rounded to 2 decimals

    Example:
        >>> percent_change(Decimal("105"), Decimal("100"))
        Decimal('5.00')
    """
    ratio = round_half_up(current / previous, 4)
    return round_half_up((ratio - 1) * HUNDRED, 2)


def crossed_below(previous_value: Decimal, previous_level: Decimal, value: Decimal, level: Decimal) -> bool:
    """Detect a value moving from at-or-above a level to below it.

    Example:
        >>> crossed_below(Decimal("11"), Decimal("10"), Decimal("9"), Decimal("10"))
        True

    Notes:
        - Returns True when previous_value >= previous_level and value < level
        - A value that was already below the level does not cross again
    """
    return previous_value >= previous_level and value < level
