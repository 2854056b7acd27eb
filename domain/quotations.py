"""
Quotation and quotation history.

A QuotationHistory holds the daily bars of one instrument sorted newest
first. Every window calculation in the indicator and health check engines
walks from an index toward older data, i.e. toward higher indices.
"""

from bisect import bisect_right
from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

from .enums import Currency
from .errors import DuplicateQuotationError, QuotationNotFoundError

if TYPE_CHECKING:
    from .indicators.base import IndicatorSet


class Quotation(BaseModel):
    """
    One completed trading day of an instrument.

    Prices are exact decimals; the OHLC invariant is validated once here
    so the calculation loops can rely on it.
    """
    model_config = {"frozen": True, "extra": "forbid"}

    date: date
    open: Decimal = Field(gt=0)
    high: Decimal = Field(gt=0)
    low: Decimal = Field(gt=0)
    close: Decimal = Field(gt=0)
    volume: int = Field(default=0, ge=0)
    currency: Currency = Currency.USD

    @model_validator(mode="after")
    def _validate_ohlc(self) -> "Quotation":
        """Low and high must enclose open and close."""
        if self.low > self.high:
            raise ValueError(f"low {self.low} is above high {self.high}")
        for name in ("open", "close"):
            value = getattr(self, name)
            if not self.low <= value <= self.high:
                raise ValueError(f"{name} {value} is outside the range {self.low} - {self.high}")
        return self


class QuotationHistory:
    """
    Date-ordered daily bars of one instrument, most recent first.

    Indicator sets are attached per date and overwritten on recomputation.
    The history itself is immutable once constructed.
    """

    def __init__(self, quotations: Iterable[Quotation]):
        ordered = sorted(quotations, key=lambda q: q.date, reverse=True)

        positions: dict[date, int] = {}
        for i, quotation in enumerate(ordered):
            if quotation.date in positions:
                raise DuplicateQuotationError(quotation.date)
            positions[quotation.date] = i

        self._quotations: tuple[Quotation, ...] = tuple(ordered)
        self._positions = positions
        # Negated ordinals are ascending, which is what bisect needs
        self._date_keys = [-q.date.toordinal() for q in ordered]
        self._indicators: dict[date, "IndicatorSet"] = {}

    def __len__(self) -> int:
        return len(self._quotations)

    def __getitem__(self, index: int) -> Quotation:
        return self._quotations[index]

    def __iter__(self) -> Iterator[Quotation]:
        return iter(self._quotations)

    def __repr__(self) -> str:
        if not self._quotations:
            return "QuotationHistory(empty)"
        return (
            f"QuotationHistory({len(self)} bars, "
            f"{self.oldest.date.isoformat()} .. {self.most_recent.date.isoformat()})"
        )

    @property
    def most_recent(self) -> Quotation | None:
        return self._quotations[0] if self._quotations else None

    @property
    def oldest(self) -> Quotation | None:
        return self._quotations[-1] if self._quotations else None

    @property
    def currency(self) -> Currency | None:
        return self._quotations[0].currency if self._quotations else None

    def index_of(self, quotation: Quotation) -> int:
        """
        Get the index of a quotation of this history.

        Raises:
            QuotationNotFoundError: If the quotation is not part of the history
        """
        index = self._positions.get(quotation.date)
        if index is None or self._quotations[index] != quotation:
            raise QuotationNotFoundError(quotation.date)
        return index

    def index_of_date(self, day: date) -> int | None:
        """
        Get the index of the oldest quotation dated at or after the given day.

        Args:
            day: The first day of interest

        Returns:
            Index into the history, or None if every quotation is older than the day

        Example:
            >>> # bars for Mon, Tue, Wed (index 2, 1, 0); asking for Saturday before Mon
            >>> history.index_of_date(saturday)
            2
        """
        count_at_or_after = bisect_right(self._date_keys, -day.toordinal())
        if count_at_or_after == 0:
            return None
        return count_at_or_after - 1

    def window(self, index: int, days: int) -> list[Quotation] | None:
        """Get `days` quotations starting at index toward older data, or None if not enough exist."""
        if index < 0 or days <= 0 or index + days > len(self._quotations):
            return None
        return list(self._quotations[index:index + days])

    # ------------------------------------------------------------------
    # Indicators
    # ------------------------------------------------------------------

    def indicator_at(self, index: int) -> "IndicatorSet | None":
        """Indicator set of the quotation at index; None if it was never calculated."""
        return self._indicators.get(self._quotations[index].date)

    def set_indicator(self, index: int, indicator_set: "IndicatorSet | None") -> None:
        """Attach (or with None, remove) the indicator set of the quotation at index."""
        day = self._quotations[index].date
        if indicator_set is None:
            self._indicators.pop(day, None)
        else:
            self._indicators[day] = indicator_set

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def weekly(self) -> "QuotationHistory":
        """
        Aggregate the daily bars into weekly bars.

        A weekly bar opens with the first and closes with the last trading day
        of an ISO week, spans the week's high and low, sums its volume and is
        dated by the week's last trading day.
        """
        weeks: dict[tuple[int, int], list[Quotation]] = {}
        for quotation in reversed(self._quotations):
            iso = quotation.date.isocalendar()
            weeks.setdefault((iso[0], iso[1]), []).append(quotation)

        weekly = []
        for days in weeks.values():
            weekly.append(Quotation(
                date=days[-1].date,
                open=days[0].open,
                high=max(q.high for q in days),
                low=min(q.low for q in days),
                close=days[-1].close,
                volume=sum(q.volume for q in days),
                currency=days[-1].currency,
            ))
        return QuotationHistory(weekly)
