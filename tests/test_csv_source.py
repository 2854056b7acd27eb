"""
Tests for the CSV quotation source.

Tests cover:
- Parsing and ordering
- Currency handling
- Structured errors for missing files and bad rows
"""

from datetime import date
from decimal import Decimal

import pytest

from adapters import CsvQuotationSource
from domain import Currency
from ports import ErrorCode, QuotationSource, QuotationSourceError

HEADER = "date,open,high,low,close,volume\n"


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV content to a temporary file and return its path."""

    def factory(content: str, name: str = "acme.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return factory


class TestCsvQuotationSource:
    """Test loading quotations from CSV files."""

    def test_implements_port(self, write_csv):
        source = CsvQuotationSource(write_csv(HEADER))
        assert isinstance(source, QuotationSource)

    def test_load(self, write_csv):
        path = write_csv(
            HEADER
            + "2024-03-01,10.0,10.5,9.8,10.2,1500\n"
            + "2024-03-04,10.2,10.9,10.1,10.8,2100\n"
        )
        history = CsvQuotationSource(path).load()

        assert len(history) == 2
        assert history.most_recent.date == date(2024, 3, 4)
        assert history.most_recent.close == Decimal("10.8")
        assert history.most_recent.volume == 2100
        assert history.currency == Currency.USD

    def test_rows_in_any_order(self, write_csv):
        path = write_csv(
            HEADER
            + "2024-03-04,10.2,10.9,10.1,10.8,2100\n"
            + "2024-03-01,10.0,10.5,9.8,10.2,1500\n"
        )
        history = CsvQuotationSource(path).load()
        assert [q.date.day for q in history] == [4, 1]

    def test_header_case_and_extra_columns(self, write_csv):
        path = write_csv(
            "Date,Open,High,Low,Close,Adj Close,Volume\n"
            "2024-03-01,10.0,10.5,9.8,10.2,10.1,1500\n"
        )
        history = CsvQuotationSource(path).load()
        assert history.most_recent.close == Decimal("10.2")

    def test_volume_optional(self, write_csv):
        path = write_csv("date,open,high,low,close\n2024-03-01,10.0,10.5,9.8,10.2\n")
        assert CsvQuotationSource(path).load().most_recent.volume == 0

    def test_currency(self, write_csv):
        path = write_csv(HEADER + "2024-03-01,1000,1050,980,1020,1500\n")
        history = CsvQuotationSource(path, "GBP").load()
        assert history.most_recent.currency == Currency.GBP


class TestCsvErrors:
    """Test structured errors."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(tmp_path / "missing.csv").load()
        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND

    def test_empty_file(self, write_csv):
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(write_csv(HEADER)).load()
        assert exc_info.value.code == ErrorCode.DATA_EMPTY

    def test_missing_column(self, write_csv):
        path = write_csv("date,open,high,close\n2024-03-01,10.0,10.5,10.2\n")
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(path).load()

        assert exc_info.value.code == ErrorCode.DATA_MISSING
        assert exc_info.value.context["column"] == "low"

    def test_invalid_date(self, write_csv):
        path = write_csv(HEADER + "03/01/2024,10.0,10.5,9.8,10.2,1500\n")
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(path).load()

        assert exc_info.value.code == ErrorCode.PARSE_DATE
        assert exc_info.value.context["line"] == 2

    def test_invalid_number(self, write_csv):
        path = write_csv(HEADER + "2024-03-01,ten,10.5,9.8,10.2,1500\n")
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(path).load()
        assert exc_info.value.code == ErrorCode.PARSE_NUMBER

    def test_invalid_bar(self, write_csv):
        path = write_csv(HEADER + "2024-03-01,10.0,9.5,9.8,10.2,1500\n")
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(path).load()

        assert exc_info.value.code == ErrorCode.DATA_INVALID
        assert exc_info.value.context["date"] == "2024-03-01"

    def test_duplicate_date(self, write_csv):
        path = write_csv(
            HEADER
            + "2024-03-01,10.0,10.5,9.8,10.2,1500\n"
            + "2024-03-01,10.2,10.9,10.1,10.8,2100\n"
        )
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(path).load()
        assert exc_info.value.code == ErrorCode.DATA_DUPLICATE

    def test_to_dict(self, tmp_path):
        with pytest.raises(QuotationSourceError) as exc_info:
            CsvQuotationSource(tmp_path / "missing.csv").load()

        data = exc_info.value.to_dict()
        assert data["code"] == ErrorCode.FILE_NOT_FOUND.value
        assert data["source"].endswith("missing.csv")
