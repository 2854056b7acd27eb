"""
CSV quotation source.

Reads daily bars from a CSV file with a header row. Column names are
matched case-insensitively; extra columns are ignored.

    date,open,high,low,close,volume
    2024-03-01,101.20,103.75,100.90,103.10,1250300

Dates must be ISO formatted. Rows may be in any order.
"""

import csv
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from pydantic import ValidationError

from domain.enums import Currency
from domain.errors import DuplicateQuotationError
from domain.quotations import Quotation, QuotationHistory
from ports import ErrorCode, QuotationSourceError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "open", "high", "low", "close")


class CsvQuotationSource:
    """Quotation source backed by a CSV file."""

    def __init__(self, path: Path | str, currency: Currency | str = Currency.USD):
        self.path = Path(path)
        self._currency = Currency(currency)

    @property
    def source_name(self) -> str:
        return str(self.path)

    @property
    def currency(self) -> Currency:
        return self._currency

    def load(self) -> QuotationHistory:
        """
        Load all rows of the file into a quotation history.

        Raises:
            QuotationSourceError: If the file is missing, a row cannot be
                parsed, a bar is invalid or a date occurs twice
        """
        if not self.path.exists():
            raise QuotationSourceError("File not found", code=ErrorCode.FILE_NOT_FOUND, source=self.source_name)

        try:
            with open(self.path, newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                columns = self._column_map(reader.fieldnames)
                quotations = [self._parse_row(row, columns, line) for line, row in enumerate(reader, start=2)]
        except OSError as e:
            raise QuotationSourceError(
                f"Cannot read file: {e}", code=ErrorCode.FILE_UNREADABLE, source=self.source_name, cause=e,
            ) from e
        except csv.Error as e:
            raise QuotationSourceError(
                f"Malformed CSV: {e}", code=ErrorCode.PARSE_CSV, source=self.source_name, cause=e,
            ) from e

        if not quotations:
            raise QuotationSourceError.empty(self.source_name)

        try:
            history = QuotationHistory(quotations)
        except DuplicateQuotationError as e:
            raise QuotationSourceError(
                str(e), code=ErrorCode.DATA_DUPLICATE, source=self.source_name, context=e.context, cause=e,
            ) from e

        logger.info(f"Loaded {len(history)} quotations from {self.path} ({history.oldest.date} - {history.most_recent.date})")
        return history

    def _column_map(self, fieldnames: list[str] | None) -> dict[str, str]:
        """Map lower-cased column names to the header as written in the file."""
        if not fieldnames:
            raise QuotationSourceError.empty(self.source_name)

        columns = {name.strip().lower(): name for name in fieldnames if name}
        for column in REQUIRED_COLUMNS:
            if column not in columns:
                raise QuotationSourceError.missing_column(self.source_name, column)
        return columns

    def _parse_row(self, row: dict[str, str], columns: dict[str, str], line: int) -> Quotation:
        def value(column: str) -> str:
            raw = row.get(columns[column])
            if raw is None or not raw.strip():
                raise QuotationSourceError(
                    f"Empty value in column {column}", code=ErrorCode.DATA_MISSING, source=self.source_name,
                    context={"line": line, "column": column},
                )
            return raw.strip()

        try:
            day = date.fromisoformat(value("date"))
        except ValueError as e:
            raise QuotationSourceError(
                f"Invalid date: {row.get(columns['date'])!r}", code=ErrorCode.PARSE_DATE,
                source=self.source_name, context={"line": line}, cause=e,
            ) from e

        try:
            prices = {column: Decimal(value(column)) for column in ("open", "high", "low", "close")}
            volume = int(Decimal(value("volume"))) if "volume" in columns and row.get(columns["volume"]) else 0
        except InvalidOperation as e:
            raise QuotationSourceError(
                "Invalid number", code=ErrorCode.PARSE_NUMBER, source=self.source_name,
                context={"line": line}, cause=e,
            ) from e

        try:
            return Quotation(date=day, volume=volume, currency=self._currency, **prices)
        except ValidationError as e:
            first = e.errors()[0]
            raise QuotationSourceError(
                f"Invalid quotation: {first.get('msg', 'validation error')}", code=ErrorCode.DATA_INVALID,
                source=self.source_name, context={"line": line, "date": day.isoformat()}, cause=e,
            ) from e
