"""
Protocol of a health check run.

A protocol owns the findings of one run against one instrument and derives
the share of confirmations, violations and uncertain findings from them.
"""

from collections import Counter
from collections.abc import Iterable, Iterator
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field

from .enums import ProtocolEntryCategory


class ProtocolEntry(BaseModel):
    """A single finding of a health check rule."""
    model_config = {"frozen": True, "extra": "forbid"}

    date: date
    category: ProtocolEntryCategory
    text: str = Field(min_length=1)


def _percentage(count: int, total: int) -> int:
    """Share of count in total as whole percent (fraction rounded to 2 decimals first)."""
    if total == 0:
        return 0
    fraction = (Decimal(count) / Decimal(total)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return int(fraction * 100)


class Protocol:
    """Ordered findings of one health check run with derived statistics."""

    def __init__(self, entries: Iterable[ProtocolEntry] | None = None):
        self._entries: list[ProtocolEntry] = list(entries or [])
        self._percentages: dict[ProtocolEntryCategory, int] = {c: 0 for c in ProtocolEntryCategory}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ProtocolEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> list[ProtocolEntry]:
        return list(self._entries)

    def add(self, entry: ProtocolEntry) -> None:
        self._entries.append(entry)

    def extend(self, entries: Iterable[ProtocolEntry]) -> None:
        self._entries.extend(entries)

    def sort_by_date(self) -> None:
        """Sort entries ascending by date; entries of the same date keep their order."""
        self._entries.sort(key=lambda e: e.date)

    def entries_of_date(self, day: date) -> list[ProtocolEntry]:
        return [e for e in self._entries if e.date == day]

    def dates(self) -> list[date]:
        """Distinct entry dates in protocol order."""
        return list(dict.fromkeys(e.date for e in self._entries))

    def count(self, category: ProtocolEntryCategory) -> int:
        return sum(1 for e in self._entries if e.category == category)

    def calculate_percentages(self) -> None:
        """Recalculate the share of each category among all entries."""
        counts = Counter(e.category for e in self._entries)
        total = len(self._entries)
        self._percentages = {c: _percentage(counts[c], total) for c in ProtocolEntryCategory}

    def percentage(self, category: ProtocolEntryCategory) -> int:
        return self._percentages[category]

    @property
    def confirmation_percentage(self) -> int:
        return self._percentages[ProtocolEntryCategory.CONFIRMATION]

    @property
    def violation_percentage(self) -> int:
        return self._percentages[ProtocolEntryCategory.VIOLATION]

    @property
    def uncertain_percentage(self) -> int:
        return self._percentages[ProtocolEntryCategory.UNCERTAIN]
