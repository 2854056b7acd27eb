"""
Population scan.

Calculates the indicators of many instruments in parallel and ranks the
population by relative strength:
1. Indicator calculation per instrument (thread pool)
2. Collection of the most recent indicator sets
3. RS ranking across all instruments with a most recent set

A failing instrument is recorded and skipped, never aborts the scan.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from config.schema import TradeHealthConfig
from domain.errors import HealthCheckError
from domain.indicators import IndicatorSet, calculate_history, rank_population
from domain.quotations import QuotationHistory

logger = logging.getLogger(__name__)


# ============================================================================
# Scan Status Tracking
# ============================================================================

class InstrumentStatus(str, Enum):
    """Status of one instrument in a scan."""
    OK = "ok"
    INSUFFICIENT = "insufficient"
    FAILED = "failed"


@dataclass
class InstrumentResult:
    """Result of calculating a single instrument."""
    symbol: str
    status: InstrumentStatus
    indicator_set: IndicatorSet | None = None
    calculated: int = 0
    error: str | None = None


@dataclass
class ScanStatus:
    """Overall scan execution status."""
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    instruments: dict[str, InstrumentResult] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ranked(self) -> dict[str, IndicatorSet]:
        """Most recent indicator sets of all instruments that took part in the ranking."""
        return {
            symbol: result.indicator_set
            for symbol, result in self.instruments.items()
            if result.status == InstrumentStatus.OK and result.indicator_set is not None
        }

    @property
    def duration(self) -> timedelta | None:
        """Scan execution duration."""
        if self.completed_at:
            return self.completed_at - self.started_at
        return None

    def add_warning(self, msg: str) -> None:
        logger.warning(msg)
        self.warnings.append(msg)

    def add_error(self, msg: str) -> None:
        logger.error(msg)
        self.errors.append(msg)


# ============================================================================
# Scan
# ============================================================================

def _calculate(symbol: str, history: QuotationHistory, config: TradeHealthConfig) -> InstrumentResult:
    try:
        calculated = calculate_history(history, config.indicators)
    except HealthCheckError as e:
        return InstrumentResult(symbol, InstrumentStatus.FAILED, error=str(e))
    except Exception as e:
        logger.exception(f"{symbol}: unexpected error during indicator calculation")
        return InstrumentResult(symbol, InstrumentStatus.FAILED, error=f"Unexpected error - {e}")

    indicator_set = history.indicator_at(0) if len(history) else None
    if indicator_set is None:
        return InstrumentResult(symbol, InstrumentStatus.INSUFFICIENT, calculated=calculated)
    return InstrumentResult(symbol, InstrumentStatus.OK, indicator_set=indicator_set, calculated=calculated)


def scan_instruments(
    histories: dict[str, QuotationHistory],
    config: TradeHealthConfig | None = None,
) -> ScanStatus:
    """
    Calculate indicators for every instrument and rank the population.

    Args:
        histories: Quotation history per symbol; indicator sets are attached in place
        config: Indicator and scan settings (defaults if omitted)

    Returns:
        ScanStatus with one result per symbol; the most recent indicator sets
        of all OK instruments carry their RS numbers
    """
    config = config or TradeHealthConfig()
    status = ScanStatus()

    workers = max(1, min(config.scan.max_workers, len(histories) or 1))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_calculate, symbol, history, config): symbol
            for symbol, history in histories.items()
        }

        for future in as_completed(futures):
            result = future.result()
            status.instruments[result.symbol] = result
            if result.status == InstrumentStatus.FAILED:
                status.add_error(f"{result.symbol}: indicator calculation failed: {result.error}")
            elif result.status == InstrumentStatus.INSUFFICIENT:
                status.add_warning(f"{result.symbol}: not enough quotations for indicators, excluded from ranking")

    population = list(status.ranked.values())
    if population:
        rank_population(population)
    logger.info(f"Ranked {len(population)} of {len(histories)} instruments")

    status.completed_at = datetime.now()
    return status
