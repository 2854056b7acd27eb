from .csv_source import CsvQuotationSource

__all__ = [
    "CsvQuotationSource",
]
